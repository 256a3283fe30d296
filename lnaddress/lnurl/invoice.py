from typing import Optional

import bolt11
import httpx
from bolt11 import Bolt11Exception
from loguru import logger
from pydantic import ValidationError

from ..core.base import Invoice, ServiceDescriptor
from ..core.errors import (
    AmountOutOfRangeError,
    InvoiceDecodeError,
    ProtocolViolationError,
)
from ..core.helpers import metadata_hash
from ..core.models import CallbackResponse
from ..core.settings import settings
from .http import client_session, get_json


def decode_invoice(response: CallbackResponse) -> Invoice:
    """Decodes and verifies the payment request of a callback response.

    Raises:
        InvoiceDecodeError: if the payment request is not a valid signed bolt11 invoice
    """
    try:
        decoded = bolt11.decode(response.pr)
    except (Bolt11Exception, ValueError, IndexError) as exc:
        raise InvoiceDecodeError(f"could not decode invoice: {exc}") from exc
    if not decoded.payment_hash:
        raise InvoiceDecodeError("invoice has no payment hash")

    return Invoice(
        bolt11=response.pr,
        amount_msat=decoded.amount_msat,
        payment_hash=decoded.payment_hash,
        description=decoded.description,
        description_hash=decoded.description_hash,
        payee=decoded.payee,
        date=decoded.date,
        expiry=decoded.expiry,
        success_action=response.success_action,
        verify_url=response.verify,
    )


def callback_request_url(descriptor: ServiceDescriptor, amount_msat: int) -> httpx.URL:
    # amount is added to the query parameters the service put in its callback
    return httpx.URL(descriptor.callback_url).copy_merge_params({"amount": amount_msat})


def check_invoice(
    descriptor: ServiceDescriptor, invoice: Invoice, amount_msat: int
) -> None:
    if (
        settings.lnurl_check_invoice_amount
        and invoice.amount_msat is not None
        and invoice.amount_msat != amount_msat
    ):
        raise ProtocolViolationError(
            f"invoice amount mismatch: requested {amount_msat} msat,"
            f" invoice is for {invoice.amount_msat} msat"
        )
    if settings.lnurl_verify_description_hash and invoice.description_hash != (
        metadata_hash(descriptor.metadata)
    ):
        raise ProtocolViolationError("invoice description hash mismatch")


class InvoiceRequester:
    """Requests invoices from the callback of a resolved LNURL-pay service.

    Holds no state between calls and may be shared by concurrent tasks.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client

    async def request_invoice(
        self, descriptor: ServiceDescriptor, amount_msat: int
    ) -> Invoice:
        """Requests an invoice for amount_msat. No request is made if the amount
        is outside of the sendable range of the service. Failed requests are not retried.

        Args:
            descriptor (ServiceDescriptor): resolved service
            amount_msat (int): amount in millisatoshis

        Raises:
            AmountOutOfRangeError: if the amount is outside the sendable range
            TransportError: if the request fails or is cancelled
            ProtocolViolationError: if the response is invalid
            InvoiceDecodeError: if the invoice can not be decoded or verified

        Returns:
            Invoice: decoded invoice
        """
        if isinstance(amount_msat, bool) or not isinstance(amount_msat, int):
            raise TypeError(f"amount_msat must be an int, got {type(amount_msat)}")
        if not descriptor.accepts(amount_msat):
            raise AmountOutOfRangeError(
                amount_msat, descriptor.min_sendable_msat, descriptor.max_sendable_msat
            )

        logger.debug(
            f"Requesting invoice for {amount_msat} msat from {descriptor.callback_url}"
        )
        async with client_session(self.client) as client:
            data = await get_json(
                client, callback_request_url(descriptor, amount_msat), "callback"
            )
        try:
            response = CallbackResponse.model_validate(data)
        except ValidationError as exc:
            logger.warning(f"Invalid callback response from {descriptor.address}: {exc}")
            raise ProtocolViolationError("invalid callback response") from exc

        invoice = decode_invoice(response)
        check_invoice(descriptor, invoice, amount_msat)
        logger.debug(f"Received invoice {invoice.payment_hash} for {amount_msat} msat")
        return invoice


async def request_invoice(
    descriptor: ServiceDescriptor,
    amount_msat: int,
    client: Optional[httpx.AsyncClient] = None,
) -> Invoice:
    """Requests a bolt11 invoice for amount_msat from a resolved service."""
    return await InvoiceRequester(client=client).request_invoice(
        descriptor, amount_msat
    )
