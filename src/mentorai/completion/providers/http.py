import httpx
from pydantic import ValidationError

from ...errors import RequestFailed, TransportError
from ..base import CompletionClient
from ..models import CompletionReply, CompletionRequest

ERROR_DETAIL_LIMIT = 200


class HttpCompletionClient(CompletionClient):
    """Completion client for a JSON-over-HTTP chat endpoint.

    POSTs ``{"message": ...}`` and expects ``{"response": ...}`` or
    ``{"error": ...}`` back.

    Hidden design decisions:
    - HTTP client setup and timeouts
    - Authentication headers
    - Which failures count as transport-level vs request-level
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
        **client_kwargs
    ):
        """Initialize the HTTP completion client.

        Args:
            url: Full URL of the completion endpoint
            api_key: Credential sent as bearer token and ``apikey`` header
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._url = url
        self._headers = {
            "Content-Type": "application/json",
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
        }
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            transport=transport,
            **client_kwargs
        )

    @property
    def url(self) -> str:
        return self._url

    @property
    def name(self) -> str:
        return httpx.URL(self._url).host or "http"

    async def complete(self, message: str) -> str:
        """Send one message to the endpoint.

        Args:
            message: The user's latest message

        Returns:
            The ``response`` text from the endpoint

        Raises:
            RequestFailed: Non-2xx status, ``error`` in body, or malformed body
            TransportError: Connection, timeout or protocol failure
        """
        request = CompletionRequest(message=message)

        try:
            resp = await self._client.post(
                self._url,
                json=request.model_dump(),
                headers=self._headers,
            )
        except httpx.RequestError as e:
            raise TransportError(
                f"{type(e).__name__}: {e}" if str(e) else type(e).__name__
            ) from e

        if not resp.is_success:
            raise RequestFailed(resp.status_code, resp.reason_phrase, _error_detail(resp))

        try:
            reply = CompletionReply.model_validate_json(resp.content)
        except ValidationError as e:
            raise RequestFailed(
                resp.status_code,
                resp.reason_phrase,
                "Malformed response body"
            ) from e

        if reply.error:
            raise RequestFailed(resp.status_code, resp.reason_phrase, reply.error)
        if reply.response is None:
            raise RequestFailed(
                resp.status_code,
                resp.reason_phrase,
                "Response body has no 'response' text"
            )
        return reply.response

    async def close(self) -> None:
        """Close the underlying httpx client."""
        await self._client.aclose()


def _error_detail(resp: httpx.Response) -> str | None:
    """Best-effort diagnostic text from a failed response."""
    try:
        reply = CompletionReply.model_validate_json(resp.content)
    except ValidationError:
        text = resp.text.strip()
        if len(text) > ERROR_DETAIL_LIMIT:
            text = text[:ERROR_DETAIL_LIMIT] + "..."
        return text or None
    return reply.error
