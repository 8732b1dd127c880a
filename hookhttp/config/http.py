"""HTTP client configuration settings."""

from pydantic import BaseModel, Field, field_validator


class HTTPSettings(BaseModel):
    """HTTP client configuration settings.

    Controls how HttpClient.from_settings builds the client and its transport.
    """

    base_url: str = Field(
        default="",
        description="Base URL prepended to relative request paths",
    )

    default_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers sent with every request",
    )

    with_events: bool = Field(
        default=True,
        description="Emit lifecycle events unless a call opts out",
    )

    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Transport timeout applied to connect, read, write and pool",
    )

    verify: bool = Field(
        default=True,
        description="Verify TLS certificates",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        # Paths start with "/", so a trailing slash would double up
        return v.rstrip("/")
