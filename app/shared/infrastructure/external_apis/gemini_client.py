# 📄 File: app/shared/infrastructure/external_apis/gemini_client.py

# 🧭 Purpose (Layman Explanation):
# Talks to Google's Gemini AI so the vet chat assistant can answer pet owners' questions,
# including questions about a photo of their pet.

# 🧪 Purpose (Technical Summary):
# Gemini `generateContent` REST client built on APIClient. Sends a multi-turn conversation
# (text and inline image parts) with fixed generation settings and extracts the reply text.
# Safety blocks surface as ContentBlockedError, quota problems as APIQuotaExceededError.

# 🔗 Dependencies:
# - aiohttp / tenacity via APIClient
# - app.shared.config.settings: API key, model, base URL, timeout

# 🔄 Connected Modules / Calls From:
# Called by: vet_care VetChatService

from functools import lru_cache
from typing import Any, Dict, List, Optional

from app.shared.config.settings import get_settings
from app.shared.core.exceptions import ExternalServiceError
from app.shared.utils.logging import get_logger

from .api_client import APIClient

logger = get_logger(__name__)

GENERATION_CONFIG = {
    "maxOutputTokens": 2048,
    "temperature": 0.7,
    "topP": 0.9,
    "topK": 40,
}


class ContentBlockedError(ExternalServiceError):
    """Raised when Gemini refuses a prompt or reply on safety grounds."""

    def __init__(self, reason: str = "SAFETY"):
        super().__init__(message=f"Content blocked: {reason}", service_name="gemini", details={"reason": reason})
        self.error_code = "CONTENT_BLOCKED"


class GeminiClient(APIClient):
    """Gemini REST client for multi-turn chat."""

    def __init__(self):
        settings = get_settings()
        super().__init__(
            base_url=settings.GOOGLE_GEMINI_API_URL,
            api_name="gemini",
            timeout=settings.GOOGLE_GEMINI_TIMEOUT,
        )
        self.api_key = settings.GOOGLE_GEMINI_API_KEY
        self.model = settings.GOOGLE_GEMINI_MODEL

    def _get_default_headers(self) -> Dict[str, str]:
        headers = super()._get_default_headers()
        if self.api_key:
            headers['x-goog-api-key'] = self.api_key
        return headers

    async def generate(self, contents: List[Dict[str, Any]]) -> str:
        """
        Generate the next model turn for a conversation.

        Args:
            contents: Gemini `contents` list (role + parts), oldest first

        Returns:
            Reply text, possibly empty

        Raises:
            ContentBlockedError: Prompt or candidate blocked for safety
            APIQuotaExceededError: Quota or rate limit exhausted
            ExternalServiceError: Any other failure
        """
        if not self.api_key:
            raise ExternalServiceError("Gemini API key is not configured", service_name="gemini")

        payload = {"contents": contents, "generationConfig": GENERATION_CONFIG}
        data = await self.post(f"models/{self.model}:generateContent", json=payload)
        return self.extract_text(data)

    @staticmethod
    def extract_text(data: Dict[str, Any]) -> str:
        """Pull the reply text out of a generateContent response."""
        feedback = data.get("promptFeedback") or {}
        block_reason: Optional[str] = feedback.get("blockReason")
        if block_reason:
            raise ContentBlockedError(block_reason)

        candidates = data.get("candidates") or []
        if not candidates:
            return ""

        candidate = candidates[0]
        if candidate.get("finishReason") == "SAFETY":
            raise ContentBlockedError("SAFETY")

        parts = (candidate.get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts).strip()


@lru_cache()
def get_gemini_client() -> GeminiClient:
    """FastAPI dependency returning the shared Gemini client."""
    return GeminiClient()
