"""
HTTP transport adapters.
"""
from .http import HttpxTransport, build_ssl_context

__all__ = ["HttpxTransport", "build_ssl_context"]
