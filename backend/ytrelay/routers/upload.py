"""Upload router relaying videos to YouTube."""

import shutil
import uuid
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ytrelay.dependencies import get_upload_relay
from ytrelay.exceptions import UploadError, ValidationError
from ytrelay.logger import upload_logger
from ytrelay.schemas.upload import UploadRequest, UploadResponse
from ytrelay.services.youtube_service import UploadRelay, remove_temp_file

router = APIRouter()


def store_upload(video: UploadFile, upload_dir: Path) -> Path:
    """Write the uploaded file to a uniquely named temp file."""
    upload_dir.mkdir(parents=True, exist_ok=True)
    path = upload_dir / f"{uuid.uuid4().hex}{Path(video.filename or '').suffix}"

    try:
        with path.open("wb") as out:
            shutil.copyfileobj(video.file, out)
    except OSError as e:
        remove_temp_file(path)
        raise UploadError(f"Could not store upload: {e}") from e

    return path


@router.post("/upload", response_model=UploadResponse)
def upload_video(
    relay: Annotated[UploadRelay, Depends(get_upload_relay)],
    video: Annotated[UploadFile | None, File()] = None,
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
):
    """
    Upload a video to YouTube.

    Expects multipart form data with a `video` file and optional `title`
    and `description` fields. The video is published as private.
    """
    if video is None or not video.filename:
        raise ValidationError("No file sent (field 'video')")

    file_path = store_upload(video, Path(relay.settings.upload_dir))
    upload_logger.info(f"Received {video.filename} ({file_path.stat().st_size} bytes)")

    result = relay.relay(
        UploadRequest(
            file_path=file_path,
            filename=video.filename,
            content_type=video.content_type,
            title=title,
            description=description,
        )
    )

    return UploadResponse(
        video_id=result.video_id,
        youtube_link=result.link,
        response=result.response,
    )
