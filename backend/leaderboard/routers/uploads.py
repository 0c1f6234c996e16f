from fastapi import APIRouter, File, Form, UploadFile

from leaderboard.schemas.settings import UploadResponse
from leaderboard.services.upload_service import UploadService

router = APIRouter(prefix="/api/upload", tags=["uploads"])


@router.post("", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    kind: str = Form("score", alias="type"),
):
    """Store a file without attaching it to anything; the caller saves the URL."""
    url = await UploadService().save(file, kind)
    return UploadResponse(url=url)
