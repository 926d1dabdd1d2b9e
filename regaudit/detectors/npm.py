"""Detector for npm client requests."""

from pydantic import TypeAdapter, ValidationError
from starlette.requests import ClientDisconnect, Request

from regaudit.config.detection import DetectionSettings
from regaudit.core.errors import DetectorFailure
from regaudit.core.logging import get_logger
from regaudit.models.detection import (
    DetectionResult,
    NpmPackageManifest,
    RegistryKind,
)


logger = get_logger(__name__)

# A literal JSON null body is an empty manifest
MANIFEST_ADAPTER = TypeAdapter(NpmPackageManifest | None)


def split_invocation(invocation: str) -> tuple[str, str]:
    """Split an npm CLI invocation into its command and the remaining arguments.

    Args:
        invocation: Raw invocation string, e.g. ``"install some-pkg --save"``

    Returns:
        Tuple of (command, extra), both trimmed
    """
    parts = invocation.strip().split(maxsplit=1)
    if not parts:
        return "", ""
    command = parts[0].strip()
    extra = parts[1].strip() if len(parts) > 1 else ""
    return command, extra


def request_target(request: Request) -> str:
    """Return the request target as received: path plus query string.

    ``raw_path`` keeps percent-escapes such as scoped package names
    (``/@scope%2fname``); ``scope["path"]`` is already decoded.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.decode("latin-1")
    else:
        path = request.scope.get("path", "")
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


class NpmDetector:
    """Recognises npm CLI traffic from its headers.

    npm sends the command it is running in the ``Referer`` header and marks
    itself in ``User-Agent``. Requests carrying the marker but no command are
    passed through as unmatched. For publish requests the package manifest in
    the body is parsed for the latest dist-tag, and the consumed body is
    handed back in ``DetectionResult.replay_body``.
    """

    name = "npm"

    def __init__(self, settings: DetectionSettings | None = None) -> None:
        self.settings = settings or DetectionSettings()

    async def detect(self, request: Request) -> DetectionResult:
        settings = self.settings

        user_agent = request.headers.get(settings.npm_client_header, "")
        if settings.npm_client_marker not in user_agent:
            return DetectionResult.declined()

        invocation = request.headers.get(settings.npm_command_header, "")
        if not invocation.strip():
            logger.debug(
                "npm_request_without_command",
                header=settings.npm_command_header,
            )
            return DetectionResult.declined()

        command, extra = split_invocation(invocation)
        attributes = {
            "command": command,
            "path": request_target(request),
            "extra": extra,
            "session": request.headers.get(settings.npm_session_header, ""),
        }

        if command != settings.npm_publish_command:
            return DetectionResult.hit(RegistryKind.NPM, attributes)

        body = await self._read_body(request)
        attributes["extra"] = self._latest_tag(body)

        logger.debug(
            "npm_publish_detected",
            latest=attributes["extra"],
            content_length=len(body),
        )
        return DetectionResult.hit(RegistryKind.NPM, attributes, replay_body=body)

    async def _read_body(self, request: Request) -> bytes:
        try:
            return await request.body()
        except (ClientDisconnect, RuntimeError) as e:
            raise DetectorFailure(
                f"failed to read publish body: {str(e) or type(e).__name__}",
                detector=self.name,
            ) from e

    def _latest_tag(self, body: bytes) -> str:
        """Parse the publish manifest and return ``dist-tags.latest``.

        Raises:
            DetectorFailure: The manifest is not valid JSON of the expected shape.
                The buffered body travels with the error.
        """
        try:
            manifest = MANIFEST_ADAPTER.validate_json(body)
        except ValidationError as e:
            raise DetectorFailure(
                f"malformed publish manifest: {e.error_count()} error(s), "
                f"first: {e.errors()[0]['msg']}",
                detector=self.name,
                replay_body=body,
            ) from e
        if manifest is None:
            return ""
        return manifest.latest_tag
