from fastapi import APIRouter
from fastapi.responses import FileResponse

from talentboard.errors import NotFoundError
from talentboard.utils.filesystem import resolve_upload

router = APIRouter(tags=["uploads"])


@router.get("/{filename}")
async def download_upload(filename: str):
    path = resolve_upload(filename)
    if path is None:
        raise NotFoundError("File")
    return FileResponse(path=str(path), filename=filename)
