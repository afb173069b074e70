"""Shared base for services that talk to the commerce platform over HTTP."""
import httpx

DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0, read=10.0, write=10.0)
DEFAULT_LIMITS = httpx.Limits(max_connections=20, max_keepalive_connections=10)


class HttpService:
    """Owns one lazily created ``httpx.AsyncClient``.

    Pass ``http_client`` to reuse an existing client (tests pass one built
    on ``httpx.MockTransport``).
    """

    def __init__(self, http_client: httpx.AsyncClient | None = None):
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy creation of shared httpx client with timeouts."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=DEFAULT_TIMEOUT,
                limits=DEFAULT_LIMITS,
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
