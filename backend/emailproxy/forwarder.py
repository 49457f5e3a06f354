# backend/emailproxy/forwarder.py
import json
import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

import httpx

from .config import settings

logger = logging.getLogger("emailproxy.forwarder")

CORS_PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Accept",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}
BODYLESS_METHODS = ("GET", "HEAD")
JSON = "application/json"


@dataclass
class ProxyResponse:
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""


class ProxyForwarder:
    """
    Stateless translator between the browser and the verification API.

    Each call is independent; nothing is shared between requests except
    configuration.
    """

    def __init__(
        self,
        upstream_base: Optional[str] = None,
        mount_prefix: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.upstream_base = upstream_base if upstream_base is not None else settings.UPSTREAM_BASE
        self.mount_prefix = mount_prefix if mount_prefix is not None else settings.MOUNT_PREFIX
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._transport = transport

    def strip_prefix(self, path: str) -> str:
        if not self.mount_prefix:
            return path
        parts = path.split(self.mount_prefix)
        return parts[1] if len(parts) > 1 else ""

    def target_url(self, path: str, query: str = "") -> str:
        url = f"{self.upstream_base}{self.strip_prefix(path)}"
        if query:
            url = f"{url}?{query}"
        return url

    def preflight(self) -> ProxyResponse:
        return ProxyResponse(status_code=204, headers=dict(CORS_PREFLIGHT_HEADERS), body=b"")

    async def forward(
        self,
        method: str,
        path: str,
        query: str = "",
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
    ) -> ProxyResponse:
        method = method.upper()
        if method == "OPTIONS":
            return self.preflight()

        incoming = httpx.Headers(headers or {})
        url = self.target_url(path, query)
        outgoing = {
            "Content-Type": incoming.get("content-type") or JSON,
            "Accept": incoming.get("accept") or JSON,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                res = await client.request(
                    method,
                    url,
                    headers=outgoing,
                    content=None if method in BODYLESS_METHODS else body,
                )
                content = res.content
        except Exception as e:
            logger.exception("Proxy request to %s failed", url)
            return ProxyResponse(
                status_code=500,
                headers={"Access-Control-Allow-Origin": "*", "Content-Type": JSON},
                body=json.dumps({"error": "Proxy request failed", "details": str(e)}).encode("utf-8"),
            )

        logger.debug("%s %s -> %d", method, url, res.status_code)
        return ProxyResponse(
            status_code=res.status_code,
            headers={
                "Content-Type": res.headers.get("content-type") or JSON,
                "Access-Control-Allow-Origin": "*",
            },
            body=content,
        )
