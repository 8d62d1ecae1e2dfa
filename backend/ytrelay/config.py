from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resumable uploads must send chunks in multiples of this size
CHUNK_GRANULARITY = 256 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = "YouTube Upload Relay"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000

    # YouTube OAuth client (YT_* variables take precedence)
    client_id: str | None = Field(
        None, validation_alias=AliasChoices("yt_client_id", "client_id")
    )
    client_secret: str | None = Field(
        None, validation_alias=AliasChoices("yt_client_secret", "client_secret")
    )
    redirect_uri: str | None = Field(
        None, validation_alias=AliasChoices("yt_redirect_uri", "redirect_uri")
    )
    refresh_token: str | None = Field(
        None, validation_alias=AliasChoices("yt_refresh_token", "refresh_token")
    )
    youtube_scopes: list[str] = ["https://www.googleapis.com/auth/youtube.upload"]
    auth_uri: str = "https://accounts.google.com/o/oauth2/auth"
    token_uri: str = "https://oauth2.googleapis.com/token"
    oauth_state: str = "ytrelay"

    # Token persistence
    tokens_file: str = "youtube_tokens.json"

    # Uploads
    upload_dir: str = "uploads"
    upload_chunk_size: int = 8 * 1024 * 1024

    # Timeouts (seconds)
    token_timeout_seconds: float = 30.0
    upload_timeout_seconds: float = 300.0

    # CORS
    cors_origins: list[str] = ["*"]

    @field_validator("upload_chunk_size")
    @classmethod
    def check_chunk_size(cls, value: int) -> int:
        if value == -1:
            return value
        if value <= 0 or value % CHUNK_GRANULARITY:
            raise ValueError(
                f"upload_chunk_size must be -1 or a positive multiple of {CHUNK_GRANULARITY}"
            )
        return value


settings = Settings()
