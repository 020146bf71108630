"""
External API clients for PetVally.
Currently the Gemini client behind the vet chat assistant.
"""

from .api_client import APIClient, APIQuotaExceededError, APITimeoutError
from .gemini_client import ContentBlockedError, GeminiClient, get_gemini_client

__all__ = [
    "APIClient",
    "APIQuotaExceededError",
    "APITimeoutError",
    "ContentBlockedError",
    "GeminiClient",
    "get_gemini_client",
]
