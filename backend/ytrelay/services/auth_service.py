"""Authorization flow for obtaining YouTube OAuth tokens."""

from fastapi import status
from google_auth_oauthlib.flow import Flow

from ytrelay.exceptions import AuthError
from ytrelay.logger import auth_logger
from ytrelay.schemas.auth import TokenSet
from ytrelay.services.token_manager import TokenManager


class AuthService:
    """Service for the one-time consent and code exchange."""

    def __init__(self, token_manager: TokenManager):
        self.token_manager = token_manager
        self.settings = token_manager.settings

    def get_oauth_flow(self, scopes: list[str] | None = None) -> Flow:
        """
        Create a Google OAuth Flow for YouTube authentication.

        Args:
            scopes: Scopes to request (defaults to the configured upload scope)

        Returns:
            Configured OAuth Flow object
        """
        flow = Flow.from_client_config(
            {
                "web": {
                    "client_id": self.token_manager.client_id,
                    "client_secret": self.token_manager.client_secret,
                    "auth_uri": self.settings.auth_uri,
                    "token_uri": self.settings.token_uri,
                }
            },
            scopes=scopes or self.settings.youtube_scopes,
            redirect_uri=self.token_manager.redirect_uri,
            state=self.settings.oauth_state,
            autogenerate_code_verifier=False,
        )

        return flow

    def build_consent_url(self, scopes: list[str] | None = None) -> str:
        """
        Generate the YouTube OAuth consent URL.

        Offline access is requested and consent is forced so that Google
        issues a refresh token even if the account authorized before.

        Returns:
            Authorization URL string
        """
        flow = self.get_oauth_flow(scopes)
        authorization_url, _ = flow.authorization_url(
            access_type="offline",
            prompt="consent",
        )

        return authorization_url

    def exchange_code(self, code: str | None) -> TokenSet:
        """
        Exchange an authorization code for tokens and store them.

        Args:
            code: Authorization code from the OAuth callback

        Returns:
            The new TokenSet

        Raises:
            AuthError: If the code is missing or Google rejects the exchange
        """
        if not code:
            raise AuthError(
                "Missing 'code' in query string", status.HTTP_400_BAD_REQUEST
            )

        try:
            flow = self.get_oauth_flow()
            flow.fetch_token(code=code, timeout=self.settings.token_timeout_seconds)
        except Exception as e:
            auth_logger.error(f"Error exchanging code for tokens: {e}")
            raise AuthError(f"Error obtaining tokens: {e}") from e

        token_set = TokenSet.from_token_response(flow.oauth2session.token)
        self.token_manager.set_tokens(token_set)
        auth_logger.info("Authorization completed, tokens stored")

        return token_set
