# backend/emailcheck/services/client.py
import logging
from typing import Dict, Iterable, Optional

import httpx
from pydantic import ValidationError

from ..config import settings
from ..errors import NetworkError, RequestError
from ..models.validation import ValidationResult
from ..utils.helpers import normalize_email

logger = logging.getLogger("emailcheck.client")


class ValidationClient:
    """
    Thin async wrapper over the upstream verification API.

    Every call is a single attempt: failures are raised, never retried.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _send(self, method: str, url: str, label: str, **kwargs) -> dict:
        try:
            async with self._client() as client:
                res = await client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.warning("%s: transport failure talking to %s: %s", label, url, e)
            raise NetworkError(f"{label} failed: {e}") from e

        if not res.is_success:
            logger.warning("%s: upstream answered %d", label, res.status_code)
            raise RequestError(res.status_code, f"{label} failed ({res.status_code})")

        try:
            data = res.json()
        except ValueError as e:
            logger.warning("%s: upstream sent a non-JSON body", label)
            raise RequestError(res.status_code, f"{label} returned an unreadable response") from e

        if not isinstance(data, dict):
            raise RequestError(res.status_code, f"{label} returned an unexpected response")
        return data

    async def validate_single(self, email: str) -> ValidationResult:
        # params= takes care of URL-encoding the address
        data = await self._send(
            "GET",
            f"{self.base_url}/validate",
            "Request",
            params={"email": email},
            headers={"Accept": "application/json"},
        )
        try:
            return ValidationResult.model_validate(data)
        except ValidationError as e:
            raise RequestError(200, "Request returned an unexpected response") from e

    async def validate_batch(self, emails: Iterable[str]) -> Dict[str, ValidationResult]:
        payload = {"emails": list(emails)}
        data = await self._send(
            "POST",
            f"{self.base_url}/validate/batch",
            "Batch request",
            json=payload,
            headers={"Accept": "*/*"},
        )

        results = data.get("results") or []
        by_email: Dict[str, ValidationResult] = {}
        for item in results:
            if not isinstance(item, dict):
                continue
            try:
                result = ValidationResult.model_validate(item)
            except ValidationError as e:
                raise RequestError(200, "Batch request returned an unexpected response") from e
            by_email[normalize_email(result.email)] = result

        logger.info(
            "Batch validated: submitted=%d returned=%d",
            len(payload["emails"]), len(by_email),
        )
        return by_email
