"""Header names and markers used by the protocol detectors."""

from pydantic import BaseModel, Field, field_validator


class DetectionSettings(BaseModel):
    """Signals the npm detector looks for on inbound requests."""

    npm_client_header: str = Field(
        default="user-agent",
        description="Header identifying the client software",
    )

    npm_client_marker: str = Field(
        default="npm",
        description="Substring of the client header that marks npm traffic",
    )

    npm_command_header: str = Field(
        default="referer",
        description="Header carrying the originating npm CLI invocation",
    )

    npm_session_header: str = Field(
        default="npm-session",
        description="Header carrying the npm session identifier",
    )

    npm_publish_command: str = Field(
        default="publish",
        description="Command whose body is parsed for the latest dist-tag",
    )

    @field_validator(
        "npm_client_header", "npm_command_header", "npm_session_header"
    )
    @classmethod
    def normalize_header_name(cls, v: str) -> str:
        """Header lookups are case-insensitive; store them lowercase."""
        name = v.strip().lower()
        if not name:
            raise ValueError("Header name cannot be empty")
        return name

    @field_validator("npm_client_marker", "npm_publish_command")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value cannot be blank")
        return v.strip()
