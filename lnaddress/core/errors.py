from typing import Optional


class LightningAddressError(Exception):
    code: int
    detail: str

    def __init__(self, detail, code=0):
        super().__init__(detail)
        self.code = code
        self.detail = detail


class MalformedAddressError(LightningAddressError):
    detail = "malformed lightning address"
    code = 10000

    def __init__(self, detail: Optional[str] = None, code: Optional[int] = None):
        super().__init__(detail or self.detail, code=code or self.code)


class TransportError(LightningAddressError):
    detail = "transport error"
    code = 20000

    def __init__(self, detail: Optional[str] = None, code: Optional[int] = None):
        super().__init__(detail or self.detail, code=code or self.code)


class ProtocolViolationError(LightningAddressError):
    detail = "protocol violation"
    code = 30000

    def __init__(self, detail: Optional[str] = None, code: Optional[int] = None):
        super().__init__(detail or self.detail, code=code or self.code)


class LnurlServiceError(ProtocolViolationError):
    """The LNURL service replied with {"status": "ERROR", "reason": ...}.

    The reason is chosen by the remote service and must not be trusted.
    """

    detail = "LNURL service error"
    code = 30001

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason or "<missing reason>"
        super().__init__(f"{self.detail}: {self.reason}", code=self.code)


class AmountOutOfRangeError(LightningAddressError):
    detail = "amount out of range"
    code = 40000

    def __init__(self, amount_msat: int, min_sendable_msat: int, max_sendable_msat: int):
        self.amount_msat = amount_msat
        self.min_sendable_msat = min_sendable_msat
        self.max_sendable_msat = max_sendable_msat
        super().__init__(
            f"{self.detail}: {amount_msat} msat not in"
            f" [{min_sendable_msat}, {max_sendable_msat}] msat",
            code=self.code,
        )


class InvoiceDecodeError(LightningAddressError):
    detail = "could not decode invoice"
    code = 50000

    def __init__(self, detail: Optional[str] = None, code: Optional[int] = None):
        super().__init__(detail or self.detail, code=code or self.code)


class ResolutionStateError(LightningAddressError):
    detail = "invalid resolution state"
    code = 60000

    def __init__(self, detail: Optional[str] = None, code: Optional[int] = None):
        super().__init__(detail or self.detail, code=code or self.code)
