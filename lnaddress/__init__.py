from loguru import logger

from .core.base import (  # noqa: F401
    Address,
    Invoice,
    ResolutionState,
    ServiceDescriptor,
)
from .core.errors import (  # noqa: F401
    AmountOutOfRangeError,
    InvoiceDecodeError,
    LightningAddressError,
    LnurlServiceError,
    MalformedAddressError,
    ProtocolViolationError,
    ResolutionStateError,
    TransportError,
)
from .lnurl import (  # noqa: F401
    AddressResolver,
    InvoiceRequester,
    LightningAddress,
    parse_address,
    request_invoice,
    resolve,
)

# silent as a library, see core.logging.configure_logger
logger.disable("lnaddress")
