"""Relay of uploaded videos to the YouTube Data API v3."""

from pathlib import Path
from typing import Any, Callable

import google_auth_httplib2
import httplib2
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from ytrelay.exceptions import AuthError, UploadError, ValidationError
from ytrelay.logger import upload_logger
from ytrelay.schemas.upload import UploadRequest, UploadResult
from ytrelay.services.token_manager import TokenManager

PRIVACY_STATUS = "private"
WATCH_URL = "https://www.youtube.com/watch?v="


def build_youtube_client(credentials: Credentials, timeout: float):
    """Build a YouTube API client whose HTTP calls time out after ``timeout`` seconds."""
    http = google_auth_httplib2.AuthorizedHttp(
        credentials, http=httplib2.Http(timeout=timeout)
    )
    return build("youtube", "v3", http=http, cache_discovery=False)


def progress_percent(bytes_sent: int, total_size: int) -> int | None:
    """Rounded upload percentage, or None when the size is unknown."""
    if not bytes_sent or not total_size:
        return None
    return round(bytes_sent / total_size * 100)


def remove_temp_file(path: Path) -> None:
    """Best-effort removal of an uploaded temp file."""
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        upload_logger.warning(f"Could not remove temp file {path}: {e}")


class UploadRelay:
    """Service forwarding a locally stored video to YouTube."""

    def __init__(
        self,
        token_manager: TokenManager,
        client_factory: Callable[[Credentials, float], Any] = build_youtube_client,
    ):
        self.token_manager = token_manager
        self.settings = token_manager.settings
        self.client_factory = client_factory

    def relay(self, upload: UploadRequest) -> UploadResult:
        """
        Upload a stored video to YouTube and discard the local copy.

        Args:
            upload: The stored upload and its optional metadata

        Returns:
            UploadResult with the video id and watch link

        Raises:
            ValidationError: If no file is attached
            UploadError: If YouTube rejects or fails the insert
        """
        if upload.file_path is None:
            raise ValidationError("No file sent (field 'video')")

        try:
            # A failed pre-refresh is not fatal: the API client refreshes on its own
            try:
                self.token_manager.get_valid_access_token()
            except AuthError as e:
                upload_logger.warning(
                    f"Could not obtain an access token before upload: {e}"
                )

            response = self._insert_video(upload)
        finally:
            remove_temp_file(upload.file_path)

        video_id = response.get("id")
        if not video_id:
            raise UploadError("YouTube response did not include a video id")

        upload_logger.info(f"Upload complete, video id {video_id}")
        return UploadResult(
            video_id=video_id,
            link=f"{WATCH_URL}{video_id}",
            response=response,
        )

    def _insert_video(self, upload: UploadRequest) -> dict[str, Any]:
        """Run the resumable videos.insert call, logging progress."""
        body = {
            "snippet": {
                "title": upload.title or upload.filename or upload.file_path.name,
                "description": upload.description or "",
            },
            "status": {
                "privacyStatus": PRIVACY_STATUS,
            },
        }

        try:
            youtube = self.client_factory(
                self.token_manager.credentials(), self.settings.upload_timeout_seconds
            )

            with open(upload.file_path, "rb") as fh:
                media = MediaIoBaseUpload(
                    fh,
                    mimetype=upload.content_type or "application/octet-stream",
                    chunksize=self.settings.upload_chunk_size,
                    resumable=True,
                )
                total_size = media.size()

                request = youtube.videos().insert(
                    part="snippet,status", body=body, media_body=media
                )

                response = None
                while response is None:
                    chunk_status, response = request.next_chunk()
                    if chunk_status:
                        percent = progress_percent(
                            chunk_status.resumable_progress, total_size
                        )
                        if percent is not None:
                            upload_logger.info(f"Uploading: {percent}%")

            return response

        except HttpError as e:
            upload_logger.error(f"YouTube API error: {e}")
            raise UploadError(_http_error_message(e)) from e
        except Exception as e:
            upload_logger.error(f"Upload failed: {e}")
            raise UploadError(str(e)) from e


def _http_error_message(error: HttpError) -> str:
    reason = getattr(error, "reason", None)
    return reason or str(error)
