# 📄 File: app/shared/infrastructure/external_apis/api_client.py

# 🧭 Purpose (Layman Explanation):
# A reliable messenger for talking to outside services over the internet: it waits a sensible
# amount of time, tries again when the connection hiccups and explains clearly what went wrong.

# 🧪 Purpose (Technical Summary):
# Generic async HTTP JSON client on aiohttp with tenacity retries for transport errors,
# status code to exception mapping and request timing logs.

# 🔗 Dependencies:
# - aiohttp: Async HTTP client
# - tenacity: Retry logic and backoff strategies

# 🔄 Connected Modules / Calls From:
# Used by: GeminiClient (vet chat AI replies)

import asyncio
import logging
import time
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientSession, ClientTimeout
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.shared.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class APIQuotaExceededError(ExternalServiceError):
    """Raised when the remote API reports an exhausted quota or rate limit."""

    def __init__(self, message: str, service_name: Optional[str] = None):
        super().__init__(message=message, service_name=service_name)
        self.error_code = "API_QUOTA_EXCEEDED"


class APITimeoutError(ExternalServiceError):
    """Raised when the remote API does not answer in time."""

    def __init__(self, message: str, service_name: Optional[str] = None):
        super().__init__(message=message, service_name=service_name)
        self.error_code = "API_TIMEOUT"


class APIClient:
    """
    Generic async HTTP client for external API integrations.

    Features:
    - Automatic retry with exponential backoff on transport errors
    - Status code to exception mapping
    - Request/response logging
    """

    def __init__(
        self,
        base_url: str,
        api_name: str,
        timeout: int = 30,
        max_retries: int = 3,
    ):
        """Initialize API client with configuration."""
        self.base_url = base_url.rstrip('/')
        self.api_name = api_name
        self.timeout = timeout
        self.max_retries = max_retries

        self.session: Optional[ClientSession] = None

    async def initialize(self) -> None:
        """Create the client session."""
        timeout = ClientTimeout(total=self.timeout)
        connector = aiohttp.TCPConnector(limit=10, limit_per_host=5)
        self.session = ClientSession(
            timeout=timeout,
            connector=connector,
            headers=self._get_default_headers()
        )
        logger.info(f"API client initialized for {self.api_name}")

    def _get_default_headers(self) -> Dict[str, str]:
        """Get default headers for requests."""
        return {
            'User-Agent': f'PetVally/1.0 ({self.api_name}-client)',
            'Accept': 'application/json',
            'Content-Type': 'application/json'
        }

    async def _send(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Make one HTTP request; transport errors propagate to the retry policy."""
        if self.session is None or self.session.closed:
            await self.initialize()

        start_time = time.time()
        async with self.session.request(method, url, params=params, json=json) as response:
            response_time = time.time() - start_time
            await self._handle_response_status(response)
            data = await response.json(content_type=None)

        logger.info(
            f"{self.api_name} API request successful: "
            f"{method} {url} - {response.status} - {response_time:.2f}s"
        )
        return data

    async def _handle_response_status(self, response: aiohttp.ClientResponse) -> None:
        """Handle HTTP response status codes."""
        if 200 <= response.status < 300:
            return

        response_text = await response.text()
        if response.status == 429 or "quota" in response_text.lower():
            raise APIQuotaExceededError(
                f"API quota exceeded for {self.api_name}",
                service_name=self.api_name
            )
        if 400 <= response.status < 500:
            raise ExternalServiceError(
                f"Client error for {self.api_name} ({response.status})",
                service_name=self.api_name,
                details={"status": response.status, "body": response_text[:500]}
            )
        raise ExternalServiceError(
            f"Server error for {self.api_name} ({response.status})",
            service_name=self.api_name,
            details={"status": response.status}
        )

    async def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Make HTTP request with retry logic.

        Raises:
            APITimeoutError: If every attempt timed out
            ExternalServiceError: On transport failures or error responses
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        retrying = retry(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=1, max=8),
            retry=retry_if_exception_type((aiohttp.ClientConnectionError, asyncio.TimeoutError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

        try:
            return await retrying(self._send)(method, url, params=params, json=json)
        except asyncio.TimeoutError:
            raise APITimeoutError(f"Timeout for {self.api_name}: {method} {endpoint}", service_name=self.api_name)
        except aiohttp.ClientError as e:
            raise ExternalServiceError(f"Client error for {self.api_name}: {e}", service_name=self.api_name)

    async def post(self, endpoint: str, json: Dict[str, Any], params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make POST request."""
        return await self.request('POST', endpoint, params=params, json=json)

    async def close(self) -> None:
        """Close the client session."""
        if self.session and not self.session.closed:
            await self.session.close()
            logger.info(f"API client closed for {self.api_name}")
        self.session = None
