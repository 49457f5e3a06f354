import logging

from fastapi import Depends, FastAPI, Request, Response

from .config import settings
from .forwarder import ProxyForwarder

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(message)s",
)

app = FastAPI(title="emailproxy")

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def get_forwarder() -> ProxyForwarder:
    return ProxyForwarder()


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}


async def proxy(request: Request, forwarder: ProxyForwarder = Depends(get_forwarder)):
    result = await forwarder.forward(
        request.method,
        request.url.path,
        request.url.query,
        request.headers,
        await request.body(),
    )
    return Response(content=result.body, status_code=result.status_code, headers=result.headers)


# ---------------------------------------------------
# Mount point: the prefix itself and everything below it
# ---------------------------------------------------
app.add_api_route(settings.MOUNT_PREFIX, proxy, methods=PROXY_METHODS, include_in_schema=False)
app.add_api_route(settings.MOUNT_PREFIX + "/{path:path}", proxy, methods=PROXY_METHODS, include_in_schema=False)
