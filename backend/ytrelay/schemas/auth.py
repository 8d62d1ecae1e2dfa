from datetime import datetime, timezone
from typing import Any

from google.oauth2.credentials import Credentials
from pydantic import BaseModel, ConfigDict


class TokenSet(BaseModel):
    """OAuth2 tokens issued by Google, as persisted in the token file."""

    model_config = ConfigDict(extra="ignore")

    access_token: str | None = None
    refresh_token: str | None = None
    scope: str | None = None
    token_type: str | None = None
    expiry_date: int | None = None  # epoch milliseconds

    @property
    def expiry(self) -> datetime | None:
        """Expiry as a naive UTC datetime, the form google-auth compares against."""
        if self.expiry_date is None:
            return None
        return datetime.fromtimestamp(self.expiry_date / 1000, tz=timezone.utc).replace(
            tzinfo=None
        )

    @classmethod
    def from_token_response(cls, token: dict[str, Any]) -> "TokenSet":
        """Build a TokenSet from the fields Google returned for a code exchange."""
        scope = token.get("scope")
        if isinstance(scope, (list, tuple)):
            scope = " ".join(scope)

        expires_at = token.get("expires_at")
        return cls(
            access_token=token.get("access_token"),
            refresh_token=token.get("refresh_token"),
            scope=scope,
            token_type=token.get("token_type"),
            expiry_date=int(expires_at * 1000) if expires_at is not None else None,
        )

    @classmethod
    def from_credentials(cls, creds: Credentials) -> "TokenSet":
        expiry_date = None
        if creds.expiry is not None:
            expiry = creds.expiry.replace(tzinfo=timezone.utc)
            expiry_date = int(expiry.timestamp() * 1000)

        return cls(
            access_token=creds.token,
            refresh_token=creds.refresh_token,
            scope=" ".join(creds.scopes) if creds.scopes else None,
            token_type="Bearer",
            expiry_date=expiry_date,
        )


class TokenStatus(BaseModel):
    """Response for the token status endpoint."""

    success: bool = True
    access_token: str | None = None
