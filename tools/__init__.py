"""Shared helpers for the pipeline's HTTP clients.

create_ssl_context:
    certifi-backed SSL context passed to every aiohttp request.
"""

from tools.utils import create_ssl_context

__all__ = [
    "create_ssl_context",
]
