"""
Structlog setup for applications embedding the gateway client.

The package only emits events through ``get_logger``; nothing is configured
on import. Call ``configure_logging`` once at startup, or let the client
factories do it by setting ``PSIGATE__CONFIGURE_LOGGING=true``.
"""
import json
import logging
from typing import IO, Any, List, Optional

import structlog
from structlog.contextvars import merge_contextvars
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper, add_log_level
from structlog.stdlib import ProcessorFormatter

from psigate.core.settings import GatewaySettings, gateway_settings

SECRET_KEYS = frozenset({"password", "passphrase", "Password", "Passphrase"})
REDACTED = "***"


def redact_secrets(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Mask credential values bound into an event."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def get_renderer(debug: bool) -> Any:
    """Console renderer in debug, JSON lines otherwise."""
    if debug:
        return ConsoleRenderer(colors=False)

    # structlog hands default/sort_keys through to the serializer
    def _dumps(obj, default=None, **kwargs):
        return json.dumps(obj, ensure_ascii=False, default=default, **kwargs)

    return JSONRenderer(serializer=_dumps)


def _pre_chain() -> List[Any]:
    return [
        merge_contextvars,
        add_log_level,
        TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def build_handler(debug: bool, stream: Optional[IO[str]] = None) -> logging.Handler:
    """Stdlib handler rendering both structlog and foreign records."""
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[
                ProcessorFormatter.remove_processors_meta,
                get_renderer(debug),
            ],
        )
    )
    return handler


def configure_logging(debug: Optional[bool] = None, *, stream: Optional[IO[str]] = None) -> logging.Handler:
    """Route structlog through stdlib logging and install one root handler.

    ``debug`` defaults to ``PSIGATE__DEBUG``. Returns the installed handler.
    """
    if debug is None:
        debug = gateway_settings.debug

    structlog.configure(
        processors=[*_pre_chain(), ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = build_handler(debug, stream)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    return handler


def configure_from_settings(settings: GatewaySettings) -> Optional[logging.Handler]:
    """Configure logging when the settings opt in; otherwise leave it alone."""
    if not settings.configure_logging:
        return None
    return configure_logging(settings.debug)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
