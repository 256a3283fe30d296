import os
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

VERSION = "0.1.0"


def find_env_file() -> Optional[str]:
    # env file: default to current dir, else home dir
    env_file = os.path.join(os.getcwd(), ".env")
    if not os.path.isfile(env_file):
        env_file = os.path.join(str(Path.home()), ".lnaddress", ".env")
    if os.path.isfile(env_file):
        return env_file
    return None


class LnAddressSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=find_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class EnvSettings(LnAddressSettings):
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")


class HttpSettings(LnAddressSettings):
    lnurl_timeout: Optional[float] = Field(
        default=None,
        title="Request timeout",
        description="Timeout in seconds for LNURL requests. None disables the timeout.",
    )
    lnurl_follow_redirects: bool = Field(default=True)
    lnurl_verify_tls: bool = Field(default=True)
    socks_proxy: Optional[str] = Field(default=None)
    http_proxy: Optional[str] = Field(default=None)


class LnurlPaySettings(LnAddressSettings):
    lnurl_check_invoice_amount: bool = Field(
        default=True,
        title="Check invoice amount",
        description="Reject invoices whose amount differs from the requested amount.",
    )
    lnurl_verify_description_hash: bool = Field(
        default=False,
        title="Verify description hash",
        description="Require the invoice description hash to commit to the LNURL metadata.",
    )


class Settings(
    EnvSettings,
    HttpSettings,
    LnurlPaySettings,
    LnAddressSettings,
):
    version: str = Field(default=VERSION)


settings = Settings()
