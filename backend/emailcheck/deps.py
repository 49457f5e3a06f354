# backend/emailcheck/deps.py
from fastapi import Header

from .services.client import ValidationClient
from .services.storage import DEFAULT_SESSION, get_store  # noqa: F401  (re-exported for routers)


def get_client() -> ValidationClient:
    return ValidationClient()


async def get_session_id(x_session_id: str = Header(DEFAULT_SESSION)) -> str:
    return x_session_id.strip() or DEFAULT_SESSION
