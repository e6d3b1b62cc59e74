"""
Client for the generation backend (text, structured JSON and images).
"""
import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Union

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..base_config import get_model_config

logger = logging.getLogger(__name__)

PromptPayload = Union[str, Dict[str, Any], List[Any]]


class GenerationError(Exception):
    """A generation call failed outright (transport, status or envelope)."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class StructuredResponseError(GenerationError):
    """The model answered but its text is not the requested JSON."""


@dataclass(frozen=True)
class InlineImage:
    mime_type: str
    data: str  # base64 payload

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


def _response_parts(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    candidates = response.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return []
    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    return [p for p in parts if isinstance(p, dict)]


def extract_text(response: Dict[str, Any]) -> str:
    """Join the text parts of the first candidate; '' when there are none."""
    return "".join(p["text"] for p in _response_parts(response) if isinstance(p.get("text"), str))


def extract_inline_image(response: Dict[str, Any]) -> Optional[InlineImage]:
    """First inline image part of the first candidate, if any."""
    for part in _response_parts(response):
        # Providers serialize either camelCase or snake_case keys
        inline = part.get("inlineData") or part.get("inline_data")
        if not isinstance(inline, dict):
            continue
        data = inline.get("data")
        if data:
            mime_type = inline.get("mimeType") or inline.get("mime_type") or "image/png"
            return InlineImage(mime_type=mime_type, data=data)
    return None


def parse_json_text(text: str) -> Any:
    """Parse JSON text, tolerating a surrounding markdown code fence."""
    cleaned = text.strip()
    match = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", cleaned)
    if match:
        cleaned = match.group(1).strip()
    try:
        return json.loads(cleaned or "{}")
    except json.JSONDecodeError as e:
        raise StructuredResponseError(f"JSON parsing error: {str(e)}", details=text) from e


class GenerationClient:
    """Stateless wrapper around the ``{model, contents, config}`` endpoint.

    Only transient transport failures are retried; any other failure is
    raised as ``GenerationError`` and the caller decides whether it is fatal.
    """

    def __init__(
        self,
        backend_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        config = get_model_config()
        self.backend_url = backend_url or config["backend_url"]
        self.timeout = timeout if timeout is not None else config["timeout"]
        self.max_attempts = max(1, max_attempts if max_attempts is not None else config["max_attempts"])
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "GenerationClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def generate(
        self,
        model: str,
        contents: PromptPayload,
        config: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """POST one generation request and return the raw response envelope."""
        payload = {"model": model, "contents": contents, "config": config or {}}
        start_time = time.time()
        status = "success"

        try:
            response = await self._post_with_retry(payload)
            if response.status_code < 200 or response.status_code >= 300:
                raise GenerationError(
                    f"Backend Error ({response.status_code}): {response.text}",
                    status_code=response.status_code,
                    details=response.text,
                )
            try:
                body = response.json()
            except ValueError as e:
                raise GenerationError(f"Malformed response from backend: {str(e)}", details=response.text) from e
            if not isinstance(body, dict):
                raise GenerationError("Malformed response from backend: expected a JSON object", details=response.text)
            return body

        except httpx.HTTPError as e:
            status = "error"
            logger.error(f"Generation transport error: {str(e)}")
            raise GenerationError(f"Transport error: {str(e)}") from e
        except GenerationError as e:
            status = "error"
            logger.error(f"Generation failed: {e.message}")
            raise
        finally:
            duration = time.time() - start_time
            logger.info(f"Generation call model={model} status={status} duration={duration:.2f}s")

    async def _post_with_retry(self, payload: Dict[str, Any]) -> httpx.Response:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(f"Retrying generation call, attempt {attempt.retry_state.attempt_number}/{self.max_attempts}")
                return await self.http_client.post(self.backend_url, json=payload)

    async def generate_text(
        self,
        model: str,
        contents: PromptPayload,
        options: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Generate free text. Returns '' when the model produced no text."""
        response = await self.generate(model, contents, options)
        return extract_text(response)

    async def generate_structured(
        self,
        model: str,
        contents: PromptPayload,
        schema: Dict[str, Any],
        options: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Generate schema-constrained JSON and return it parsed.

        Raises ``StructuredResponseError`` when the text does not parse.
        """
        config = dict(options or {})
        config.update({"responseMimeType": "application/json", "responseSchema": schema})
        response = await self.generate(model, contents, config)
        return parse_json_text(extract_text(response))

    async def generate_image(
        self,
        model: str,
        contents: PromptPayload,
        options: Optional[Dict[str, Any]] = None,
    ) -> Optional[InlineImage]:
        """Generate an image. Returns None when the response carries no image."""
        response = await self.generate(model, contents, options)
        return extract_inline_image(response)
