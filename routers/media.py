from fastapi import APIRouter, Depends, HTTPException, UploadFile, File

from security import require_admin
from storage import upload_image, StorageError

router = APIRouter()


@router.post("/upload")
def upload(file: UploadFile = File(...), admin: dict = Depends(require_admin)):
    try:
        uploaded = upload_image(file.file.read(), file.filename or "upload.jpg")
    except StorageError as e:
        raise HTTPException(500, {"message": "Failed to upload image", "error": str(e)})
    return {"success": True, "url": uploaded["url"], "file_id": uploaded["file_id"]}
