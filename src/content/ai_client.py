"""Async Ollama client that produces site-wide copy for a business.

Implements the ``ContentCollaborator`` protocol: ``generate_content`` returns
the raw JSON payload (hero, about, services, testimonials, contact) or raises
``ContentUnavailable``.  Validation of the payload is left to the caller.

Typical usage::

    client = OllamaContentClient()
    if await client.is_available():
        payload = await client.generate_content("restaurant", {"business_name": "Luigi's"})
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from src.errors import ContentUnavailable

_SYSTEM_PROMPT = (
    "You write concise, professional website copy for small businesses. "
    "Always answer with a single JSON object and nothing else."
)

_PROMPT_TEMPLATE = """\
Write website content for a {industry} business.

Business details:
{details}

Return JSON with exactly these keys:
  "hero": {{"title": str, "subtitle": str, "cta": str}},
  "about": {{"title": str, "content": str, "benefits": [str, ...]}},
  "services": [str, ...],
  "testimonials": [{{"quote": str, "author": str, "role": str}}, ...],
  "contact": {{"phone": str, "email": str, "address": str, "hours": str}}
"""


def build_prompt(industry: str, business_metadata: dict[str, Any]) -> str:
    """Render the content prompt for *industry* and *business_metadata*."""
    details = "\n".join(
        f"- {key}: {value}" for key, value in sorted(business_metadata.items()) if value not in (None, "")
    )
    return _PROMPT_TEMPLATE.format(industry=industry, details=details or "- (none provided)")


class OllamaContentClient:
    """Async content collaborator backed by the Ollama REST API."""

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3.1:8b",
        timeout: int = 60,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
        )

    async def generate_content(self, industry: str, business_metadata: dict[str, Any]) -> dict:
        """Ask the model for site content and return the decoded JSON object.

        Raises:
            ContentUnavailable: If the server is unreachable, times out,
                returns an HTTP error, or answers with something that is not
                a JSON object.
        """
        payload = {
            "model": self.model,
            "prompt": build_prompt(industry, business_metadata),
            "system": _SYSTEM_PROMPT,
            "format": "json",
            "stream": False,
        }
        try:
            async with self._client() as client:
                response = await client.post("/api/generate", json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.ConnectError as exc:
            raise ContentUnavailable(
                f"Cannot connect to Ollama at {self.base_url}. Is the server running?"
            ) from exc
        except httpx.TimeoutException as exc:
            raise ContentUnavailable(f"Request to Ollama timed out after {self.timeout}s.") from exc
        except httpx.HTTPStatusError as exc:
            raise ContentUnavailable(
                f"Ollama returned HTTP {exc.response.status_code}: {exc.response.text[:200]}"
            ) from exc

        text = data.get("response", "")
        try:
            content = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ContentUnavailable(f"Ollama response is not valid JSON: {exc}") from exc
        if not isinstance(content, dict):
            raise ContentUnavailable("Ollama response is not a JSON object")
        return content

    async def is_available(self) -> bool:
        """Return ``True`` if the Ollama server responds to ``/api/tags``."""
        try:
            async with self._client() as client:
                response = await client.get("/api/tags")
                return response.status_code == 200
        except (httpx.ConnectError, httpx.TimeoutException):
            return False
