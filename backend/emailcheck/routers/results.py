from fastapi import APIRouter, HTTPException, Depends, Response

from ..config import settings
from ..deps import get_session_id, get_store
from ..services.storage import ArtifactStore
from ..services.writer import XLSX_MEDIA_TYPE

router = APIRouter()


@router.get("/download", response_model=None)
async def download_results(
    session_id: str = Depends(get_session_id),
    store: ArtifactStore = Depends(get_store),
):
    state = store.get(session_id)
    if state.workbook is None:
        raise HTTPException(404, "No validated results to download")

    return Response(
        state.workbook,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{settings.DOWNLOAD_FILENAME}"'},
    )


@router.delete("/download", status_code=204)
async def release_results(
    session_id: str = Depends(get_session_id),
    store: ArtifactStore = Depends(get_store),
):
    store.release(session_id)
    return Response(status_code=204)
