import logging
from functools import lru_cache

import httpx
from pydantic import BaseModel

from burpp.core import get_settings

logger = logging.getLogger(__name__)

SPAM_CHECK_PROMPT = (
    "You are a content moderator. Analyze the following review and determine if it is spam, "
    "contains inappropriate language, or is a genuine review. "
    'Respond with only "SPAM", "INAPPROPRIATE", or "GENUINE".'
)

_REJECTION_REASONS = {
    "SPAM": "Review appears to be spam",
    "INAPPROPRIATE": "Review contains inappropriate content",
}


class ModerationServiceError(Exception):
    """Raised when the moderation API is unavailable or returns an unexpected response."""


class ModerationConfigError(ModerationServiceError):
    """Raised when moderation is not configured."""


class ModerationResult(BaseModel):
    approved: bool
    flagged: bool = False
    reason: str | None = None
    categories: dict[str, bool] = {}


class OpenAICompatibleModerationProvider:
    """Moderation endpoint plus a one-word chat classification for spam."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None,
        model: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        if not self.base_url.endswith("/v1"):
            self.base_url = f"{self.base_url}/v1"
        self.api_key = api_key
        self.model = model
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _post(self, client: httpx.AsyncClient, path: str, payload: dict) -> dict:
        try:
            r = await client.post(f"{self.base_url}{path}", json=payload, headers=self._headers())
            r.raise_for_status()
            return r.json()
        except httpx.HTTPStatusError as e:
            body = getattr(e.response, "text", None) or ""
            if body:
                logger.warning("Moderation API error %s: %s", e.response.status_code, body[:500])
            raise ModerationServiceError(
                f"Moderation API returned {e.response.status_code}. Please try again later."
            ) from e
        except httpx.RequestError as e:
            raise ModerationServiceError(
                "Moderation service unavailable (timeout or connection error). Please try again later."
            ) from e
        except ValueError as e:
            raise ModerationServiceError("Moderation API returned invalid JSON.") from e

    async def moderate(self, text: str) -> ModerationResult:
        async with httpx.AsyncClient(timeout=30.0, transport=self._transport) as client:
            data = await self._post(client, "/moderations", {"input": text})
            try:
                result = data["results"][0]
            except (KeyError, IndexError, TypeError) as e:
                raise ModerationServiceError("Moderation API returned unexpected response format.") from e
            if result.get("flagged"):
                return ModerationResult(
                    approved=False,
                    flagged=True,
                    reason="Content violates community guidelines",
                    categories={k: bool(v) for k, v in (result.get("categories") or {}).items()},
                )

            data = await self._post(
                client,
                "/chat/completions",
                {
                    "model": self.model,
                    "messages": [
                        {"role": "system", "content": SPAM_CHECK_PROMPT},
                        {"role": "user", "content": text},
                    ],
                    "temperature": 0.3,
                    "max_tokens": 10,
                },
            )
        choices = data.get("choices") or []
        content = ((choices[0].get("message") or {}).get("content") or "") if choices else ""
        classification = content.strip().upper()
        if classification in _REJECTION_REASONS:
            return ModerationResult(approved=False, flagged=True, reason=_REJECTION_REASONS[classification])
        return ModerationResult(approved=True)


@lru_cache
def get_moderation_provider() -> OpenAICompatibleModerationProvider:
    s = get_settings()
    if not s.moderation_api_base_url:
        raise ModerationConfigError("Moderation service not configured.")
    return OpenAICompatibleModerationProvider(
        base_url=s.moderation_api_base_url,
        api_key=s.moderation_api_key,
        model=s.moderation_model,
    )
