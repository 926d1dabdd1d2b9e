"""Detection models for registry request classification."""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class RegistryKind(str, Enum):
    """Known registry protocol tags."""

    NPM = "npm"
    IMAGE = "image"


class RequestMetadata(BaseModel):
    """Classified metadata for a single request."""

    registry_kind: Annotated[
        str, Field(description="Tag of the registry protocol that matched")
    ] = ""
    matched: Annotated[
        bool, Field(description="Whether the detector recognised the request")
    ] = False
    attributes: dict[str, str] = Field(
        default_factory=dict,
        description="Protocol-specific fields such as command or session",
    )

    model_config = ConfigDict(use_enum_values=True)


class DetectionResult(BaseModel):
    """Outcome of one detector run, plus the body it consumed if any."""

    metadata: RequestMetadata = Field(
        default_factory=RequestMetadata,
        description="Classified request metadata",
    )
    replay_body: Annotated[
        bytes | None,
        Field(description="Buffered request body to re-install on the request"),
    ] = None

    @property
    def matched(self) -> bool:
        return self.metadata.matched

    @property
    def content_length(self) -> int | None:
        if self.replay_body is None:
            return None
        return len(self.replay_body)

    @classmethod
    def declined(cls) -> DetectionResult:
        """Result for a request that does not belong to the detector."""
        return cls()

    @classmethod
    def hit(
        cls,
        registry_kind: RegistryKind | str,
        attributes: dict[str, str] | None = None,
        replay_body: bytes | None = None,
    ) -> DetectionResult:
        """Result for a recognised request."""
        kind = (
            registry_kind.value
            if isinstance(registry_kind, RegistryKind)
            else registry_kind
        )
        if not kind:
            raise ValueError("Matched results require a registry kind")
        return cls(
            metadata=RequestMetadata(
                registry_kind=kind,
                matched=True,
                attributes=dict(attributes or {}),
            ),
            replay_body=replay_body,
        )


class DistTags(BaseModel):
    """Distribution tags of an npm package manifest."""

    latest: str | None = None

    model_config = ConfigDict(extra="ignore")


class NpmPackageManifest(BaseModel):
    """The parts of an npm publish payload the detector understands."""

    dist_tags: DistTags | None = Field(default=None, alias="dist-tags")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @property
    def latest_tag(self) -> str:
        if self.dist_tags is None:
            return ""
        return self.dist_tags.latest or ""
