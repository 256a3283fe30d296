from typing import Optional, Union

import httpx
from loguru import logger

from ..core.base import Address, Invoice, ResolutionState, ServiceDescriptor
from ..core.errors import AmountOutOfRangeError, ResolutionStateError
from .invoice import InvoiceRequester
from .resolver import AddressResolver


class LightningAddress:
    """A Lightning Address and its resolution state.

    UNRESOLVED -> DISCOVERING -> RESOLVED -> REQUESTING_INVOICE -> INVOICE_READY,
    with any failure leading to FAILED, which is terminal. RESOLVED and
    INVOICE_READY accept further invoice requests. Use InvoiceRequester directly
    to request invoices concurrently for the same descriptor.
    """

    def __init__(
        self,
        address: Union[str, Address],
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.resolver = AddressResolver(address, client=client)
        self.requester = InvoiceRequester(client=client)
        self._state = ResolutionState.UNRESOLVED
        self.error: Optional[Exception] = None

    @classmethod
    async def create(
        cls,
        address: Union[str, Address],
        client: Optional[httpx.AsyncClient] = None,
    ) -> "LightningAddress":
        lightning_address = cls(address, client=client)
        await lightning_address.resolve()
        return lightning_address

    @property
    def address(self) -> Address:
        return self.resolver.address

    @property
    def state(self) -> ResolutionState:
        return self._state

    @property
    def descriptor(self) -> ServiceDescriptor:
        if self.resolver.descriptor is None:
            raise ResolutionStateError(f"{self.address} is not resolved ({self._state})")
        return self.resolver.descriptor

    def _fail(self, exc: Exception) -> None:
        self._state = ResolutionState.FAILED
        self.error = exc

    async def resolve(self) -> ServiceDescriptor:
        if self._state != ResolutionState.UNRESOLVED:
            raise ResolutionStateError(f"cannot resolve in state {self._state}")
        self._state = ResolutionState.DISCOVERING
        try:
            descriptor = await self.resolver.discover()
        except Exception as exc:
            self._fail(exc)
            raise
        self._state = ResolutionState.RESOLVED
        return descriptor

    async def get_invoice(self, amount_msat: int) -> Invoice:
        if self._state not in (
            ResolutionState.RESOLVED,
            ResolutionState.INVOICE_READY,
        ):
            raise ResolutionStateError(f"cannot request invoice in state {self._state}")
        descriptor = self.descriptor
        # precondition, the resolution stays usable for another amount
        if not descriptor.accepts(amount_msat):
            raise AmountOutOfRangeError(
                amount_msat, descriptor.min_sendable_msat, descriptor.max_sendable_msat
            )

        self._state = ResolutionState.REQUESTING_INVOICE
        try:
            invoice = await self.requester.request_invoice(descriptor, amount_msat)
        except Exception as exc:
            logger.debug(f"Invoice request for {self.address} failed: {exc}")
            self._fail(exc)
            raise
        self._state = ResolutionState.INVOICE_READY
        return invoice
