from ytrelay.services.auth_service import AuthService
from ytrelay.services.token_manager import TokenManager
from ytrelay.services.token_store import TokenStore
from ytrelay.services.youtube_service import UploadRelay

__all__ = ["AuthService", "TokenManager", "TokenStore", "UploadRelay"]
