from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class UploadRequest(BaseModel):
    """A video received over HTTP and stored in a temp file."""

    file_path: Path | None = None
    filename: str | None = None
    content_type: str | None = None
    title: str | None = None
    description: str | None = None


class UploadResult(BaseModel):
    """Outcome of a successful relay."""

    video_id: str
    link: str
    response: dict[str, Any] = {}


class UploadResponse(BaseModel):
    """Response body for the upload endpoint."""

    success: bool = True
    video_id: str = Field(serialization_alias="videoId")
    youtube_link: str = Field(serialization_alias="youtubeLink")
    response: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Error body for the JSON endpoints."""

    success: bool = False
    error: str
