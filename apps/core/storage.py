"""UploadThing file storage client.

Hotel and room pictures are uploaded straight from the browser to
UploadThing; the backend only needs to delete files once a picture is
replaced or its hotel/room is removed.
"""

from __future__ import annotations

import logging
from typing import Iterable
from urllib.parse import urlparse

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the storage service rejects or fails a request."""


def file_key_from_url(url: str | None) -> str:
    """Return the file key of an UploadThing URL (its last path segment)."""
    if not url:
        return ""
    path = urlparse(url).path or url
    return path.rstrip("/").rsplit("/", 1)[-1]


def delete_files(file_keys: str | Iterable[str]) -> dict:
    """
    Delete one or more files from UploadThing.

    Args:
        file_keys: a single key or an iterable of keys

    Returns:
        dict: the service response, e.g. ``{"success": true, "deletedCount": 1}``
    """
    if isinstance(file_keys, str):
        file_keys = [file_keys]
    keys = [key for key in file_keys if key]
    if not keys:
        return {"success": True, "deletedCount": 0}

    url = f"{settings.UPLOADTHING_API_URL.rstrip('/')}/v6/deleteFiles"
    headers = {
        "x-uploadthing-api-key": settings.UPLOADTHING_API_KEY,
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

    try:
        response = requests.post(
            url,
            json={"fileKeys": keys},
            headers=headers,
            timeout=settings.UPLOADTHING_TIMEOUT,
        )
        response.raise_for_status()
        result = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("UploadThing delete failed for %s: %s", keys, exc)
        raise StorageError(f"Could not delete files {keys}") from exc

    if result.get("success") is False:
        logger.error("UploadThing refused to delete %s: %s", keys, result)
        raise StorageError(f"Storage refused to delete files {keys}")

    logger.info("Deleted %s file(s) from UploadThing", len(keys))
    return result


def delete_file_by_url(url: str | None) -> dict:
    return delete_files(file_key_from_url(url))
