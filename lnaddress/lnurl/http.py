import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional, Union

import httpx
from httpx import Response
from loguru import logger

from ..core.errors import LnurlServiceError, ProtocolViolationError, TransportError
from ..core.settings import settings


def get_proxy() -> Optional[str]:
    if settings.socks_proxy:
        return f"socks5://{settings.socks_proxy}"
    return settings.http_proxy or None


def create_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        verify=settings.lnurl_verify_tls,
        proxy=get_proxy(),
        headers={"User-Agent": f"lnaddress/{settings.version}"},
        timeout=settings.lnurl_timeout,
        follow_redirects=settings.lnurl_follow_redirects,
    )


@asynccontextmanager
async def client_session(
    client: Optional[httpx.AsyncClient] = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yields the caller's client untouched, or a fresh client that is closed on exit."""
    if client is not None:
        yield client
        return
    async with create_client() as new_client:
        yield new_client


def raise_on_error_response(resp: Response, what: str) -> Dict[str, Any]:
    """Decodes an LNURL response body and raises if it is not a usable JSON object.

    Args:
        resp (Response): response of the LNURL service
        what (str): name of the exchange, used in error messages

    Raises:
        LnurlServiceError: if the service replied with an LNURL error
        TransportError: if the HTTP status is an error without an LNURL error body
        ProtocolViolationError: if the body is not a JSON object

    Returns:
        Dict[str, Any]: decoded response body
    """
    try:
        data = resp.json()
    except ValueError:
        if resp.is_error:
            raise TransportError(
                f"{what} request failed: HTTP status {resp.status_code}"
            )
        raise ProtocolViolationError(f"invalid {what} response")

    if isinstance(data, dict) and str(data.get("status", "")).upper() == "ERROR":
        reason = data.get("reason")
        logger.warning(f"LNURL service error in {what} response: {reason}")
        raise LnurlServiceError(str(reason) if reason is not None else None)
    if resp.is_error:
        raise TransportError(f"{what} request failed: HTTP status {resp.status_code}")
    if not isinstance(data, dict):
        raise ProtocolViolationError(f"invalid {what} response")
    return data


async def get_json(
    client: httpx.AsyncClient,
    url: Union[str, httpx.URL],
    what: str,
) -> Dict[str, Any]:
    logger.trace(f"GET {url}")
    try:
        resp = await client.get(url)
    except asyncio.CancelledError as exc:
        raise TransportError("cancelled") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise TransportError(f"{what} request failed: {exc}") from exc
    logger.trace(f"{what} response: HTTP {resp.status_code}")
    return raise_on_error_response(resp, what)
