"""
Image uploads to ImageKit through its upload REST API.
"""
import base64
from typing import Optional

import requests

from config import Config
from logger import get_logger

logger = get_logger(__name__)


class StorageError(Exception):
    pass


def upload_image(content: bytes, filename: str, folder: Optional[str] = None) -> dict:
    """Upload raw bytes and return {"url", "file_id", "name"}."""
    if not Config.IMAGEKIT_PRIVATE_KEY:
        raise StorageError("IMAGEKIT_PRIVATE_KEY is not configured")
    if not content:
        raise StorageError("Empty file")

    data = {
        "file": base64.b64encode(content).decode("ascii"),
        "fileName": filename,
        "folder": folder or Config.IMAGEKIT_FOLDER,
        "useUniqueFileName": "true",
    }
    try:
        # ImageKit authenticates with the private key as the basic-auth user
        response = requests.post(
            Config.IMAGEKIT_UPLOAD_URL,
            data=data,
            auth=(Config.IMAGEKIT_PRIVATE_KEY, ""),
            timeout=60,
        )
        response.raise_for_status()
        body = response.json()
    except requests.exceptions.RequestException as e:
        logger.error("Image upload failed: %s", e)
        raise StorageError(f"Image upload failed: {e}") from e

    logger.info("Uploaded image %s", body.get("name"))
    return {"url": body.get("url"), "file_id": body.get("fileId"), "name": body.get("name")}
