"""
Clients for the email plausibility service: the external lookup that decides
whether an address is real beyond its syntax.
"""

from typing import Any, Dict, Optional, Protocol, runtime_checkable
import asyncio
import logging

import aiohttp

from ..core.config import Settings, get_settings
from ..core.exceptions import EmailCheckError

logger = logging.getLogger(__name__)


@runtime_checkable
class EmailChecker(Protocol):
    """Anything that can answer whether an address is deliverable."""

    async def check_email(self, address: str) -> bool: ...


class HttpEmailChecker:
    """
    Queries an HTTP verification endpoint with ``GET <url>?email=<address>``.

    The endpoint must answer with a JSON object holding a boolean under the
    configured result field, e.g. ``{"valid": true}``.
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.url = settings.EMAIL_CHECK_URL
        self.api_key = settings.EMAIL_CHECK_API_KEY
        self.result_field = settings.EMAIL_CHECK_RESULT_FIELD
        self.timeout = aiohttp.ClientTimeout(total=settings.EMAIL_CHECK_TIMEOUT_SECONDS)
        self._warned_unconfigured = False

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-Api-Key"] = self.api_key
        return headers

    async def check_email(self, address: str) -> bool:
        """
        Asks the service about one address.

        Returns:
            True when the service considers the address deliverable

        Raises:
            EmailCheckError: If the service is unreachable, times out or answers
                with something other than a successful JSON verdict
        """
        if not self.url:
            if not self._warned_unconfigured:
                logger.warning("EMAIL_CHECK_URL is not configured, accepting all addresses")
                self._warned_unconfigured = True
            return True

        if not address:
            return False

        try:
            async with aiohttp.ClientSession(timeout=self.timeout, headers=self._headers()) as session:
                async with session.get(self.url, params={"email": address}) as response:
                    if response.status >= 400:
                        raise EmailCheckError(
                            f"Email check service returned HTTP {response.status}",
                            details={"status": response.status},
                        )
                    payload = await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            logger.error("Email check service timed out")
            raise EmailCheckError("Email check service timed out") from e
        except aiohttp.ClientError as e:
            logger.error(f"Email check service request failed: {str(e)}")
            raise EmailCheckError(f"Email check service request failed: {str(e)}") from e
        except ValueError as e:
            logger.error(f"Email check service returned invalid JSON: {str(e)}")
            raise EmailCheckError("Email check service returned invalid JSON") from e

        return self._read_verdict(payload)

    def _read_verdict(self, payload: Any) -> bool:
        verdict = payload.get(self.result_field) if isinstance(payload, dict) else None
        if not isinstance(verdict, bool):
            logger.error(f"Email check response has no boolean '{self.result_field}' field")
            raise EmailCheckError(
                "Email check service returned an unexpected response",
                details={"result_field": self.result_field},
            )
        return verdict
