"""Shared HTTP helpers for the aiohttp-based clients."""

import ssl

import certifi


def create_ssl_context() -> ssl.SSLContext:
    """SSL context verifying peers against the certifi CA bundle."""
    return ssl.create_default_context(cafile=certifi.where())
