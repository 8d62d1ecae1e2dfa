from ytrelay.schemas.auth import TokenSet, TokenStatus
from ytrelay.schemas.upload import (
    ErrorResponse,
    UploadRequest,
    UploadResponse,
    UploadResult,
)

__all__ = [
    "TokenSet",
    "TokenStatus",
    "ErrorResponse",
    "UploadRequest",
    "UploadResponse",
    "UploadResult",
]
