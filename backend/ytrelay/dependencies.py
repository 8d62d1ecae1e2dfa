"""FastAPI dependencies providing the shared services."""

from typing import Annotated

from fastapi import Depends

from ytrelay.config import settings
from ytrelay.services.auth_service import AuthService
from ytrelay.services.token_manager import TokenManager
from ytrelay.services.youtube_service import UploadRelay

# Single token manager for the process
token_manager = TokenManager(settings)


def get_token_manager() -> TokenManager:
    """Dependency for getting the token manager."""
    return token_manager


def get_auth_service(
    manager: Annotated[TokenManager, Depends(get_token_manager)],
) -> AuthService:
    """Dependency for getting the authorization flow service."""
    return AuthService(manager)


def get_upload_relay(
    manager: Annotated[TokenManager, Depends(get_token_manager)],
) -> UploadRelay:
    """Dependency for getting the upload relay."""
    return UploadRelay(manager)
