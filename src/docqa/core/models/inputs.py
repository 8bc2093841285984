"""Uploaded artifacts and the file/paste input variants."""

import mimetypes
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field

_PARAM_SEPARATOR = ";"
_CHARSET_PARAM = "charset"


class Artifact(BaseModel):
    """A user-supplied file before decoding."""

    name: str = Field(description="Display name, usually the file name")
    media_type: str = Field(
        default="", description="Declared media type, e.g. 'application/pdf'"
    )
    data: bytes = Field(repr=False, description="Raw file bytes")

    @property
    def base_media_type(self) -> str:
        """Media type without parameters, lower-cased."""
        return self.media_type.split(_PARAM_SEPARATOR, 1)[0].strip().lower()

    @property
    def charset(self) -> str | None:
        """The ``charset`` parameter of the media type, if declared."""
        for param in self.media_type.split(_PARAM_SEPARATOR)[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == _CHARSET_PARAM and value.strip():
                return value.strip().strip('"')
        return None

    @classmethod
    def from_path(cls, path: str | Path) -> "Artifact":
        """Read *path* and guess its media type from the file name."""
        path = Path(path)
        media_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, media_type=media_type or "", data=path.read_bytes())


class FileInput(BaseModel):
    """Context that came from an uploaded, extracted artifact."""

    kind: Literal["file"] = "file"
    artifact_name: str = ""
    text: str = ""


class PastedInput(BaseModel):
    """Context typed or pasted directly by the user."""

    kind: Literal["paste"] = "paste"
    text: str = ""


DocumentInput = Annotated[FileInput | PastedInput, Field(discriminator="kind")]


def normalize_input(document_input: FileInput | PastedInput) -> str:
    """Return the context string a question is asked against."""
    if isinstance(document_input, FileInput):
        return document_input.text
    if isinstance(document_input, PastedInput):
        return document_input.text
    raise TypeError(f"Unknown document input: {type(document_input).__name__}")
