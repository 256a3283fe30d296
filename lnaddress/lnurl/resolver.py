from typing import Any, Dict, Optional, Union

import httpx
from loguru import logger
from pydantic import ValidationError

from ..core.base import Address, ResolutionState, ServiceDescriptor
from ..core.errors import (
    MalformedAddressError,
    ProtocolViolationError,
    ResolutionStateError,
)
from ..core.helpers import parse_metadata
from ..core.models import WellKnownResponse
from .http import client_session, get_json

FORBIDDEN_ADDRESS_CHARS = set("/?#")


def parse_address(address: str) -> Address:
    """Splits a Lightning Address into username and domain.

    Raises:
        MalformedAddressError: if the address does not consist of exactly two
            non-empty segments separated by a single "@"
    """
    if not isinstance(address, str):
        raise MalformedAddressError(f"address must be a string, got {type(address)}")
    parts = address.strip().split("@")
    if len(parts) != 2:
        raise MalformedAddressError(
            f"expected exactly one '@' in lightning address, found {len(parts) - 1}"
        )
    username, domain = parts
    if not username or not domain:
        raise MalformedAddressError("username and domain must not be empty")
    for segment in (username, domain):
        if any(c.isspace() or c in FORBIDDEN_ADDRESS_CHARS for c in segment):
            raise MalformedAddressError(f"invalid character in '{segment}'")
    parsed = Address(username=username, domain=domain)
    try:
        url = httpx.URL(parsed.lnurlp_url)
    except httpx.InvalidURL as exc:
        raise MalformedAddressError(f"invalid domain '{domain}': {exc}") from exc
    if not url.host:
        raise MalformedAddressError(f"invalid domain '{domain}'")
    return parsed


def normalize_callback_url(callback: str) -> str:
    # trailing slashes of the path only, the query and fragment are kept as sent
    end = len(callback)
    for sep in "?#":
        index = callback.find(sep)
        if index != -1:
            end = min(end, index)
    return callback[:end].rstrip("/") + callback[end:]


def validate_callback_url(callback_url: str) -> None:
    try:
        url = httpx.URL(callback_url)
    except httpx.InvalidURL as exc:
        raise ProtocolViolationError("invalid callback url") from exc
    if not url.host:
        raise ProtocolViolationError("invalid callback url")
    if url.scheme == "https":
        return
    if url.scheme == "http" and url.host.endswith(".onion"):
        return
    raise ProtocolViolationError("invalid callback url")


def build_descriptor(address: Address, data: Dict[str, Any]) -> ServiceDescriptor:
    """Validates a discovery response and turns it into a service descriptor."""
    try:
        response = WellKnownResponse.model_validate(data)
    except ValidationError as exc:
        logger.warning(f"Invalid discovery response for {address}: {exc}")
        raise ProtocolViolationError("invalid discovery response") from exc

    if response.tag != "payRequest":
        raise ProtocolViolationError(f"wrong tag: {response.tag}")
    try:
        parse_metadata(response.metadata)
    except ValueError as exc:
        raise ProtocolViolationError("invalid metadata") from exc

    callback_url = normalize_callback_url(response.callback)
    validate_callback_url(callback_url)

    if response.min_sendable < 0 or response.min_sendable > response.max_sendable:
        raise ProtocolViolationError("invalid sendable range")

    return ServiceDescriptor(
        address=address,
        callback_url=callback_url,
        min_sendable_msat=response.min_sendable,
        max_sendable_msat=response.max_sendable,
        metadata=response.metadata,
        comment_allowed=response.comment_allowed,
        allows_comments=response.comment_allowed > 0,
        nostr_pubkey=response.nostr_pubkey or None,
        allows_nostr=response.allows_nostr,
        payer_data=response.payer_data,
        status=response.status,
    )


class AddressResolver:
    """Resolves a Lightning Address to the LNURL-pay service behind it."""

    address: Address
    state: ResolutionState
    descriptor: Optional[ServiceDescriptor]
    error: Optional[Exception]

    def __init__(
        self,
        address: Union[str, Address],
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.address = address if isinstance(address, Address) else self.parse(address)
        self.client = client
        self.state = ResolutionState.UNRESOLVED
        self.descriptor = None
        self.error = None

    @staticmethod
    def parse(address: str) -> Address:
        return parse_address(address)

    async def discover(self) -> ServiceDescriptor:
        """Fetches and validates the service descriptor from the well-known endpoint.

        Raises:
            TransportError: if the request fails or is cancelled
            ProtocolViolationError: if the response is not a valid payRequest
            ResolutionStateError: if the resolver failed before or is busy

        Returns:
            ServiceDescriptor: validated descriptor
        """
        if self.state in (ResolutionState.DISCOVERING, ResolutionState.FAILED):
            raise ResolutionStateError(f"cannot discover in state {self.state}")

        self.state = ResolutionState.DISCOVERING
        logger.debug(f"Resolving lightning address {self.address}")
        try:
            async with client_session(self.client) as client:
                data = await get_json(client, self.address.lnurlp_url, "discovery")
            descriptor = build_descriptor(self.address, data)
        except Exception as exc:
            self.state = ResolutionState.FAILED
            self.descriptor = None
            self.error = exc
            logger.debug(f"Resolving {self.address} failed: {exc}")
            raise

        self.descriptor = descriptor
        self.state = ResolutionState.RESOLVED
        logger.debug(
            f"Resolved {self.address}: callback {descriptor.callback_url},"
            f" sendable [{descriptor.min_sendable_msat},"
            f" {descriptor.max_sendable_msat}] msat"
        )
        return descriptor


async def resolve(
    address: str, client: Optional[httpx.AsyncClient] = None
) -> ServiceDescriptor:
    """Resolves a Lightning Address to its validated LNURL-pay service descriptor."""
    return await AddressResolver(address, client=client).discover()
