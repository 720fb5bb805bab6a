"""File attachments and their resolution into wire values.

An :class:`InputFile` is one of three variants:

* :class:`RemoteFile` - a ``file_id`` the Bot API already stores;
* :class:`LocalFile` - a path on disk, read only when the request body is built;
* :class:`InlineFile` - a filename plus bytes already in memory.

:func:`resolve_file` turns a variant into either the plain text value that
goes straight into the form, or a :class:`FilePart` that the request builder
later turns into a multipart section.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import ClassVar, Optional, Union

from pydantic import BaseModel

from tgwire.exceptions import ConfigurationError


class FileSource(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"
    INLINE = "inline"


class InputFile(BaseModel):
    """Base of the three attachment variants.  Use the ``from_*`` constructors."""

    source: ClassVar[FileSource]

    model_config = {"frozen": True}

    @staticmethod
    def from_id(file_id: str) -> "RemoteFile":
        return RemoteFile(file_id=file_id)

    @staticmethod
    def from_path(path: Union[str, "os.PathLike[str]"]) -> "LocalFile":
        return LocalFile(path=os.fspath(path))

    @staticmethod
    def from_bytes(filename: str, content: bytes) -> "InlineFile":
        return InlineFile(filename=filename, content=content)

    @property
    def populated(self) -> bool:
        raise NotImplementedError


class RemoteFile(InputFile):
    source: ClassVar[FileSource] = FileSource.REMOTE

    file_id: str

    @property
    def populated(self) -> bool:
        return bool(self.file_id)


class LocalFile(InputFile):
    source: ClassVar[FileSource] = FileSource.LOCAL

    path: str

    @property
    def populated(self) -> bool:
        return bool(self.path)


class InlineFile(InputFile):
    source: ClassVar[FileSource] = FileSource.INLINE

    filename: str
    content: bytes

    @property
    def populated(self) -> bool:
        return bool(self.filename)


class FilePart(BaseModel):
    """A binary form part waiting for the request builder.

    Exactly one of *path* (read later) and *content* (already in memory) is set.
    """

    name: str
    filename: str
    path: Optional[str] = None
    content: Optional[bytes] = None

    model_config = {"frozen": True}


def check_file(attachment: InputFile, field: str) -> None:
    """Raise :class:`ConfigurationError` unless *attachment* holds exactly one usable source."""
    if not isinstance(attachment, (RemoteFile, LocalFile, InlineFile)):
        raise ConfigurationError(f"expected an InputFile variant, got {type(attachment).__name__}", field=field)
    if not attachment.populated:
        raise ConfigurationError(f"{attachment.source.value} file attachment is empty", field=field)


def resolve_file(attachment: InputFile, part_name: str) -> Union[str, FilePart]:
    """Pick the wire strategy for *attachment*.

    Returns the file id for remote files, otherwise a :class:`FilePart` named
    *part_name*.  Never touches the filesystem.
    """
    if attachment.source is FileSource.REMOTE:
        return attachment.file_id
    if attachment.source is FileSource.LOCAL:
        return FilePart(name=part_name, filename=os.path.basename(attachment.path), path=attachment.path)
    return FilePart(name=part_name, filename=attachment.filename, content=attachment.content)
