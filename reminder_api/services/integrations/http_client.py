"""
HTTP client helper with standardized timeout configuration.

Ensures all outbound HTTP calls (Airtable lookup, LINE push) have explicit
timeouts so a slow upstream cannot hang a request.
"""

import httpx


def get_httpx_timeout() -> httpx.Timeout:
    """
    Get standardized timeout configuration for HTTP clients.

    Returns:
        httpx.Timeout used as the client-wide default
    """
    return httpx.Timeout(
        10.0,  # Default timeout for all operations
        connect=5.0,  # Time to establish connection
        read=10.0,  # Time to read response
        write=5.0,  # Time to write request
        pool=5.0,  # Time to get connection from pool
    )


def create_httpx_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """
    Create an httpx.AsyncClient with standardized timeout configuration.

    Args:
        transport: Optional transport override (tests pass httpx.MockTransport)

    Returns:
        httpx.AsyncClient configured with appropriate timeouts
    """
    return httpx.AsyncClient(timeout=get_httpx_timeout(), transport=transport)
