"""Prompt definition schema.

One JSON document per prompt, stored anywhere below the prompt root. The
models below validate the fields the server relies on and ignore the rest.
"""

import json
from pathlib import Path, PurePosixPath
from typing import Annotated, List, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
)

from ...exceptions import MalformedManifestError


class PromptArgumentSpec(BaseModel):
    """Argument accepted by a prompt template."""

    model_config = ConfigDict(extra="allow")

    name: str
    description: Optional[str] = None
    required: bool = False


class DirectoryAttachment(BaseModel):
    """Attach every file of a resource subdirectory."""

    kind: Literal["directory"]
    path: str


class FixedAttachment(BaseModel):
    """Attach a single named resource."""

    kind: Literal["fixed"]
    name: str


AttachmentSpec = Annotated[
    Union[DirectoryAttachment, FixedAttachment], Field(discriminator="kind")
]


class PromptDefinition(BaseModel):
    """A reusable prompt template and the resources it declares."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    arguments: List[PromptArgumentSpec] = Field(
        default_factory=list,
        validation_alias=AliasChoices("args", "arguments"),
    )
    template: Optional[str] = None
    instructions: Optional[str] = None
    resources: Optional[List[str]] = None
    attachments: Optional[List[AttachmentSpec]] = None

    _source: Optional[PurePosixPath] = PrivateAttr(default=None)

    @property
    def source(self) -> Optional[PurePosixPath]:
        """Path of the defining file relative to the prompt root."""
        return self._source

    @property
    def catalog_name(self) -> str:
        """Name reported in listings: the identifier, else the file stem."""
        if self.id:
            return self.id
        return self._source.stem if self._source else ""

    def argument_dicts(self) -> List[dict]:
        return [arg.model_dump(exclude_unset=True) for arg in self.arguments]

    @classmethod
    def from_file(cls, path: Path, relative_path: PurePosixPath) -> "PromptDefinition":
        """Parse a prompt file.

        Raises:
            MalformedManifestError: If the file is not a JSON object matching the schema
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedManifestError(relative_path, str(e)) from e

        if not isinstance(data, dict):
            raise MalformedManifestError(relative_path, "prompt file must contain a JSON object")

        try:
            definition = cls.model_validate(data)
        except ValidationError as e:
            raise MalformedManifestError(
                relative_path, f"{e.error_count()} validation error(s)"
            ) from e

        definition._source = relative_path
        return definition
