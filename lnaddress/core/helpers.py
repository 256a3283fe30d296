import hashlib
import json
import math
from typing import List, Optional


def msat_to_sat_ceil(amount_msat: int) -> int:
    return math.ceil(amount_msat / 1000)


def msat_to_sat_floor(amount_msat: int) -> int:
    return amount_msat // 1000


def sat_to_msat(amount_sat: int) -> int:
    return amount_sat * 1000


def parse_metadata(metadata: str) -> List[list]:
    """Parses LNURL-pay metadata, a JSON encoded array of [mime type, content] pairs.

    Raises:
        ValueError: if the metadata is not a JSON array of arrays
    """
    entries = json.loads(metadata)
    if not isinstance(entries, list):
        raise ValueError("metadata is not a JSON array")
    for entry in entries:
        if not isinstance(entry, list) or len(entry) < 2:
            raise ValueError(f"invalid metadata entry: {entry}")
        if not isinstance(entry[0], str):
            raise ValueError(f"invalid metadata mime type: {entry[0]}")
    return entries


def metadata_description(metadata: str) -> Optional[str]:
    """Returns the text/plain entry of the metadata, if any."""
    try:
        entries = parse_metadata(metadata)
    except ValueError:
        return None
    return next(
        (str(entry[1]) for entry in entries if entry[0] == "text/plain"), None
    )


def metadata_hash(metadata: str) -> str:
    # the invoice description hash commits to the metadata string exactly as received
    return hashlib.sha256(metadata.encode("utf-8")).hexdigest()
