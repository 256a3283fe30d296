from .address import LightningAddress  # noqa: F401
from .invoice import InvoiceRequester, request_invoice  # noqa: F401
from .resolver import AddressResolver, parse_address, resolve  # noqa: F401
