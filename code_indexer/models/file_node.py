"""
Uploaded file tree model.

Dependencies: pydantic
System role: Inbound file description produced by the upload/extraction step
"""

from collections.abc import Iterator
from pathlib import PurePosixPath
from typing import Literal

from pydantic import BaseModel, Field


class FileNode(BaseModel):
    """File or directory from an extracted upload."""

    name: str | None = Field(default=None, description="Base name")
    path: str = Field(description="Path relative to the upload root")
    type: Literal["file", "directory"] = Field(default="file")
    size: int | None = Field(default=None, ge=0)
    extension: str | None = Field(default=None, description="File extension, with or without dot")
    content: str | None = Field(default=None, description="Text content (code files only)")
    children: list["FileNode"] | None = Field(default=None)

    @property
    def resolved_extension(self) -> str:
        """Extension without leading dot, falling back to the path suffix."""
        ext = self.extension or PurePosixPath(self.path).suffix
        return ext.lstrip(".").lower()

    def iter_files(self) -> Iterator["FileNode"]:
        """Yield this node if it is a file, else every file beneath it."""
        if self.type == "file":
            yield self
            return
        for child in self.children or []:
            yield from child.iter_files()
