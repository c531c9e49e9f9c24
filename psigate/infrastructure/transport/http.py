"""
HTTPS transport for the gateway messengers (httpx).

Provides:
- one POST per call, no retry
- per-call timeout override
- TLS version pinning and certificate verification toggle
- request/response debug logging (metadata only, never the body)
"""
from __future__ import annotations

import ssl
import time
from typing import Dict, Optional

import httpx

from psigate.core.logging_config import get_logger
from psigate.domain.exceptions import ConfigurationError, TransportError
from psigate.shared.codes import ClientCode

logger = get_logger(__name__)

# Security level 0 is needed for the ciphers legacy protocol versions use
_LEGACY_VERSIONS = {"TLSv1", "TLSv1_1"}


def build_ssl_context(tls_version: Optional[str] = None, verify_ssl: bool = True) -> ssl.SSLContext:
    """Build the client SSL context, failing fast on unsupported settings."""
    try:
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        if verify_ssl:
            context.load_default_certs()
        else:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

        if tls_version:
            try:
                version = ssl.TLSVersion[tls_version]
            except KeyError:
                raise ConfigurationError(
                    f"Unknown TLS version {tls_version}",
                    code=ClientCode.TLS_UNAVAILABLE,
                    details={"tls_version": tls_version},
                ) from None
            if not getattr(ssl, f"HAS_{tls_version}", False):
                raise ConfigurationError(
                    f"{tls_version} is not supported by the linked OpenSSL",
                    code=ClientCode.TLS_UNAVAILABLE,
                    details={"tls_version": tls_version},
                )
            if tls_version in _LEGACY_VERSIONS:
                context.set_ciphers("DEFAULT:@SECLEVEL=0")
            context.minimum_version = version
            context.maximum_version = version
    except (ssl.SSLError, ValueError) as exc:
        raise ConfigurationError(
            f"Cannot build SSL context: {exc}",
            code=ClientCode.TLS_UNAVAILABLE,
            details={"tls_version": tls_version},
        ) from exc
    return context


class HttpxTransport:
    """Synchronous httpx transport implementing the ``Transport`` port."""

    def __init__(
        self,
        timeout: float = 30.0,
        tls_version: Optional[str] = None,
        verify_ssl: bool = True,
        headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.Client] = None,
        debug: bool = False,
    ):
        """
        Args:
            timeout: default timeout in seconds for the whole request
            tls_version: pin the protocol, e.g. ``"TLSv1_2"``; ``None`` negotiates
            verify_ssl: verify peer certificate and host name
            headers: extra request headers
            client: pre-built ``httpx.Client``; TLS settings are then ignored
            debug: log request/response metadata
        """
        self.timeout = timeout
        self.debug = debug
        self.default_headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "Accept": "text/xml",
            "User-Agent": "psigate-client/1.0",
        }
        if headers:
            self.default_headers.update(headers)

        self._owns_client = client is None
        if client is None:
            client = httpx.Client(
                timeout=httpx.Timeout(timeout),
                verify=build_ssl_context(tls_version, verify_ssl),
                follow_redirects=False,
            )
        self._client = client

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _log_request(self, url: str, body: bytes) -> None:
        if self.debug:
            logger.debug("gateway.request", url=url, size=len(body))

    def _log_response(self, url: str, response: httpx.Response, elapsed_ms: float) -> None:
        if self.debug:
            logger.debug(
                "gateway.response",
                url=url,
                status_code=response.status_code,
                size=len(response.content),
                elapsed_ms=round(elapsed_ms, 2),
            )

    def send(self, url: str, body: bytes, *, timeout: Optional[float] = None) -> bytes:
        effective = self.timeout if timeout is None else timeout
        self._log_request(url, body)
        start = time.monotonic()
        try:
            response = self._client.post(
                url,
                content=body,
                headers=self.default_headers,
                timeout=httpx.Timeout(effective),
            )
        except httpx.TimeoutException as exc:
            logger.warning("gateway.timeout", url=url, timeout=effective)
            raise TransportError(
                f"Request timeout after {effective}s",
                code=ClientCode.TRANSPORT_TIMEOUT,
                url=url,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("gateway.network_error", url=url, error=str(exc))
            raise TransportError(f"Network error: {exc}", url=url) from exc

        self._log_response(url, response, (time.monotonic() - start) * 1000)

        if not response.is_success:
            raise TransportError(
                f"Gateway responded with HTTP {response.status_code}",
                code=ClientCode.TRANSPORT_STATUS,
                url=url,
                status_code=response.status_code,
            )
        return response.content
