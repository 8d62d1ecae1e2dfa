"""Owner of the single live OAuth token set."""

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from ytrelay.config import Settings
from ytrelay.exceptions import AuthError, PersistenceWarning
from ytrelay.logger import auth_logger, storage_logger
from ytrelay.schemas.auth import TokenSet
from ytrelay.services.token_store import TokenStore


class TimeoutRequest(Request):
    """google-auth transport that applies a default timeout to every call."""

    def __init__(self, timeout: float):
        super().__init__()
        self.timeout = timeout

    def __call__(self, url, method="GET", body=None, headers=None, timeout=None, **kwargs):
        return super().__call__(
            url,
            method=method,
            body=body,
            headers=headers,
            timeout=timeout or self.timeout,
            **kwargs,
        )


class TokenManager:
    """Hold the current TokenSet, refresh it on demand and persist replacements."""

    def __init__(self, settings: Settings, store: TokenStore | None = None):
        self.settings = settings
        self.store = store or TokenStore(settings.tokens_file)
        self.client_id: str | None = None
        self.client_secret: str | None = None
        self.redirect_uri: str | None = None
        self._tokens: TokenSet | None = None

        self.configure(settings.client_id, settings.client_secret, settings.redirect_uri)

        if settings.refresh_token:
            self._tokens = TokenSet(refresh_token=settings.refresh_token)
            auth_logger.info("Using refresh token from environment variables")

    def configure(
        self, client_id: str | None, client_secret: str | None, redirect_uri: str | None
    ) -> None:
        """Set the OAuth client configuration, warning if any part is missing."""
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

        if not self.is_configured:
            auth_logger.warning(
                "CLIENT_ID / CLIENT_SECRET / REDIRECT_URI are not all set; "
                "authorization and token refresh will fail"
            )

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret and self.redirect_uri)

    @property
    def tokens(self) -> TokenSet | None:
        return self._tokens

    @property
    def has_refresh_token(self) -> bool:
        return bool(self._tokens and self._tokens.refresh_token)

    def load_persisted(self) -> TokenSet | None:
        """
        Adopt the token set stored on disk, if any.

        A token file that cannot be read is logged and ignored; whatever
        token set is already in memory stays current.

        Returns:
            The loaded TokenSet, or None if nothing was loaded
        """
        try:
            stored = self.store.load()
        except PersistenceWarning as e:
            storage_logger.warning(f"Ignoring token file: {e}")
            return None

        if stored is None:
            return None

        self._tokens = stored
        storage_logger.info(f"Loaded tokens from {self.store.path}")
        return stored

    def set_tokens(self, token_set: TokenSet) -> None:
        """Replace the current token set and overwrite the token file."""
        self._tokens = token_set

        try:
            self.store.save(token_set)
            storage_logger.info(f"Tokens saved to {self.store.path}")
        except PersistenceWarning as e:
            storage_logger.warning(f"Tokens kept in memory only: {e}")

    def credentials(self) -> Credentials:
        """Build google-auth credentials from the current token set."""
        tokens = self._tokens or TokenSet()
        scopes = tokens.scope.split() if tokens.scope else self.settings.youtube_scopes

        return Credentials(
            token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            token_uri=self.settings.token_uri,
            client_id=self.client_id,
            client_secret=self.client_secret,
            scopes=scopes,
            expiry=tokens.expiry,
        )

    def get_valid_access_token(self) -> str:
        """
        Return an unexpired access token, refreshing it if needed.

        Returns:
            Access token string

        Raises:
            AuthError: If no refresh token is held or the refresh is rejected
        """
        if self._tokens and self._tokens.access_token and self.credentials().valid:
            return self._tokens.access_token

        if not self.has_refresh_token:
            raise AuthError("No refresh token available; authorize via /auth first")

        if not self.is_configured:
            raise AuthError("OAuth client is not configured")

        creds = self.credentials()
        try:
            creds.refresh(TimeoutRequest(self.settings.token_timeout_seconds))
        except GoogleAuthError as e:
            auth_logger.error(f"Token refresh failed: {e}")
            raise AuthError(f"Token refresh failed: {e}") from e

        refreshed = TokenSet.from_credentials(creds)
        self.set_tokens(refreshed)
        auth_logger.info("Access token refreshed")

        return refreshed.access_token
