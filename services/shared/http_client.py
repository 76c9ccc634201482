"""
Traced HTTP client for outbound calls.

Usage:
    from services.shared.http_client import traced_client

    async with traced_client(timeout=10.0) as client:
        resp = await client.post("https://hooks.slack.com/services/...", json=payload)
        # X-Trace-ID header is automatically injected
"""

import httpx
from contextlib import asynccontextmanager
from typing import AsyncIterator

from services.shared.logging import trace_id_var

USER_AGENT = "linkding-relay/1.0"


class TraceTransport(httpx.AsyncHTTPTransport):
    """
    httpx transport wrapper that injects the X-Trace-ID header of the
    inbound request being handled into every outbound request.
    """

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        trace_id = trace_id_var.get("")
        if trace_id:
            request.headers["X-Trace-ID"] = trace_id
        return await super().handle_async_request(request)


@asynccontextmanager
async def traced_client(
    timeout: float = 10.0,
    **kwargs,
) -> AsyncIterator[httpx.AsyncClient]:
    """
    Create an httpx.AsyncClient that auto-injects X-Trace-ID.

    Args:
        timeout: Request timeout in seconds. Default 10.0.
        **kwargs: Additional kwargs passed to httpx.AsyncClient.
    """
    headers = {"User-Agent": USER_AGENT, **kwargs.pop("headers", {})}
    async with httpx.AsyncClient(
        transport=TraceTransport(),
        timeout=timeout,
        headers=headers,
        **kwargs,
    ) as client:
        yield client
