# backend/emailcheck/routers/validate.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import get_client
from ..errors import NetworkError, RequestError
from ..models.validation import ValidationResult
from ..services.client import ValidationClient
from ..utils.helpers import normalize_email

router = APIRouter()
logger = logging.getLogger("emailcheck.validate")


@router.get("/validate", response_model=ValidationResult)
async def validate_single(
    email: str = Query(""),
    client: ValidationClient = Depends(get_client),
):
    email = normalize_email(email)
    if not email:
        raise HTTPException(status_code=400, detail="Please enter an email address.")

    try:
        return await client.validate_single(email)
    except RequestError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except NetworkError as e:
        raise HTTPException(status_code=503, detail=e.message)
