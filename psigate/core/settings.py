"""
Gateway settings using pydantic-settings v2 with nested env keys.

Example: ``PSIGATE__ACCOUNT_MANAGER__HOST=dev.psigate.com:8645``.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

TLSVersionName = Literal["TLSv1", "TLSv1_1", "TLSv1_2", "TLSv1_3"]


class TransportSettings(BaseModel):
    timeout: float = Field(default=30.0, gt=0)
    # production gateways negotiate legacy TLS only and fail host verification
    tls_version: Optional[TLSVersionName] = None
    verify_ssl: bool = True
    user_agent: str = "psigate-client/1.0"


class AccountManagerSettings(BaseModel):
    host: Optional[str] = None
    cid: Optional[str] = None
    user_id: Optional[str] = None
    password: Optional[SecretStr] = None


class XMLMessengerSettings(BaseModel):
    host: Optional[str] = None
    store_id: Optional[str] = None
    passphrase: Optional[SecretStr] = None


class GatewaySettings(BaseSettings):
    debug: bool = False
    # factories install the structlog root handler when set
    configure_logging: bool = False
    transport: TransportSettings = Field(default_factory=TransportSettings)
    account_manager: AccountManagerSettings = Field(default_factory=AccountManagerSettings)
    xml_messenger: XMLMessengerSettings = Field(default_factory=XMLMessengerSettings)

    model_config = SettingsConfigDict(
        env_prefix="PSIGATE__",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )


gateway_settings = GatewaySettings()
