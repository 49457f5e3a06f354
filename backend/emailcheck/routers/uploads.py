# backend/emailcheck/routers/uploads.py
import logging

from fastapi import (
    APIRouter,
    UploadFile,
    File,
    Depends,
    HTTPException,
)

from ..config import settings
from ..deps import get_client, get_session_id, get_store
from ..errors import (
    EmptySheetError,
    NetworkError,
    NoEmailsFoundError,
    ParseError,
    RequestError,
)
from ..models.validation import BatchResponse, BatchStatus
from ..services.client import ValidationClient
from ..services.pipeline import run_batch
from ..services.storage import ArtifactStore, BatchInProgress

router = APIRouter()
logger = logging.getLogger("emailcheck.uploads")

ALLOWED_EXTENSIONS = (".xlsx", ".xls")


# ---------------------------------------------------
# Batch upload
# ---------------------------------------------------
@router.post("/create", response_model=BatchResponse)
async def create_upload(
    file: UploadFile = File(...),
    session_id: str = Depends(get_session_id),
    client: ValidationClient = Depends(get_client),
    store: ArtifactStore = Depends(get_store),
):
    fname = (file.filename or "").lower()
    if not fname.endswith(ALLOWED_EXTENSIONS):
        raise HTTPException(status_code=400, detail="Only XLSX, XLS allowed")

    try:
        store.begin(session_id, file.filename)
    except BatchInProgress:
        raise HTTPException(status_code=409, detail="A batch validation is already running.")

    run = None
    try:
        content = await file.read()
        if len(content) > settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024:
            raise HTTPException(
                status_code=413,
                detail=f"File too large (max {settings.MAX_UPLOAD_SIZE_MB} MB)",
            )

        run = await run_batch(content, file.filename, client)

    except (ParseError, EmptySheetError, NoEmailsFoundError) as e:
        logger.info("Rejected upload %s: %s", file.filename, e.message)
        raise HTTPException(status_code=422, detail=e.message)
    except RequestError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except NetworkError as e:
        raise HTTPException(status_code=503, detail=e.message)
    finally:
        if run is None:
            store.finish(session_id)
        else:
            store.finish(session_id, run.summary, run.workbook)

    return BatchResponse(
        filename=file.filename,
        summary=run.summary,
        download_url="/results/download",
    )


# ---------------------------------------------------
# Status Route
# ---------------------------------------------------
@router.get("/status", response_model=BatchStatus)
async def get_upload_status(
    session_id: str = Depends(get_session_id),
    store: ArtifactStore = Depends(get_store),
):
    state = store.get(session_id)
    return BatchStatus(
        running=state.running,
        filename=state.filename,
        summary=state.summary,
        download_ready=state.workbook is not None,
    )
