from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# ------- LNURL-pay wire models -------
# Responses are decoded strictly: "1000" is not accepted for an int field and
# true is not accepted for an int field. Unknown fields are ignored.

WIRE_CONFIG = ConfigDict(strict=True, extra="ignore", populate_by_name=True)


# ------- LNURL: DISCOVERY -------


class PayerDataDetails(BaseModel):
    model_config = WIRE_CONFIG

    mandatory: bool = False


class PayerData(BaseModel):
    """LUD-18 payer data requested by the service."""

    model_config = WIRE_CONFIG

    name: Optional[PayerDataDetails] = None
    pubkey: Optional[PayerDataDetails] = None
    identifier: Optional[PayerDataDetails] = None
    email: Optional[PayerDataDetails] = None
    auth: Optional[PayerDataDetails] = None


class WellKnownResponse(BaseModel):
    model_config = WIRE_CONFIG

    status: Optional[str] = None
    tag: str
    callback: str
    metadata: str
    min_sendable: int = Field(alias="minSendable")
    max_sendable: int = Field(alias="maxSendable")
    comment_allowed: int = Field(default=0, ge=0, alias="commentAllowed")
    payer_data: Optional[PayerData] = Field(default=None, alias="payerData")
    nostr_pubkey: Optional[str] = Field(default=None, alias="nostrPubkey")
    allows_nostr: bool = Field(default=False, alias="allowsNostr")

    @field_validator("status", "payer_data", mode="wrap")
    @classmethod
    def drop_invalid_optional(cls, value: Any, handler: Any) -> Any:
        # informational fields that do not affect payment are dropped if malformed
        try:
            return handler(value)
        except ValidationError:
            return None


# ------- LNURL: CALLBACK -------


class SuccessAction(BaseModel):
    """LUD-09 success action. tag is one of "message", "url" or "aes"."""

    model_config = WIRE_CONFIG

    tag: str
    message: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    ciphertext: Optional[str] = None
    iv: Optional[str] = None


class CallbackResponse(BaseModel):
    model_config = WIRE_CONFIG

    status: Optional[str] = None
    success_action: Optional[SuccessAction] = Field(
        default=None, alias="successAction"
    )
    verify: Optional[str] = None
    routes: Optional[List[Any]] = None
    pr: str
