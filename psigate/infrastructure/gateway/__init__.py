"""
Factory for gateway clients built from settings.
"""
from __future__ import annotations

from typing import Optional

from psigate.application.ports.transport import Transport
from psigate.core.logging_config import configure_from_settings, get_logger
from psigate.core.settings import GatewaySettings, gateway_settings
from psigate.domain.exceptions import ConfigurationError
from psigate.infrastructure.transport.http import HttpxTransport

from .account_manager import AccountManagerClient
from .xml_messenger import XMLMessengerClient

logger = get_logger(__name__)


def build_transport(settings: Optional[GatewaySettings] = None) -> HttpxTransport:
    cfg = (settings or gateway_settings).transport
    return HttpxTransport(
        timeout=cfg.timeout,
        tls_version=cfg.tls_version,
        verify_ssl=cfg.verify_ssl,
        headers={"User-Agent": cfg.user_agent},
        debug=(settings or gateway_settings).debug,
    )


def get_account_manager(
    settings: Optional[GatewaySettings] = None,
    *,
    transport: Optional[Transport] = None,
) -> AccountManagerClient:
    settings = settings or gateway_settings
    cfg = settings.account_manager
    if not (cfg.host and cfg.cid and cfg.user_id and cfg.password):
        raise ConfigurationError(
            "ACCOUNT_MANAGER configuration incomplete",
            details={"required": ["host", "cid", "user_id", "password"]},
        )
    configure_from_settings(settings)
    owns = transport is None
    transport = transport or build_transport(settings)
    logger.info("gateway.client_created", client="account_manager", host=cfg.host)
    return AccountManagerClient(
        cfg.host,
        cfg.cid,
        cfg.user_id,
        cfg.password.get_secret_value(),
        transport=transport,
        owns_transport=owns,
    )


def get_xml_messenger(
    settings: Optional[GatewaySettings] = None,
    *,
    transport: Optional[Transport] = None,
) -> XMLMessengerClient:
    settings = settings or gateway_settings
    cfg = settings.xml_messenger
    if not (cfg.host and cfg.store_id and cfg.passphrase):
        raise ConfigurationError(
            "XML_MESSENGER configuration incomplete",
            details={"required": ["host", "store_id", "passphrase"]},
        )
    configure_from_settings(settings)
    owns = transport is None
    transport = transport or build_transport(settings)
    logger.info("gateway.client_created", client="xml_messenger", host=cfg.host)
    return XMLMessengerClient(
        cfg.host,
        cfg.store_id,
        cfg.passphrase.get_secret_value(),
        transport=transport,
        owns_transport=owns,
    )


__all__ = [
    "AccountManagerClient",
    "XMLMessengerClient",
    "build_transport",
    "get_account_manager",
    "get_xml_messenger",
]
