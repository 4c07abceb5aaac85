"""
ClockPanel Client - Upload Request Model

Per-file upload payload sent to the device's /file endpoint.

Author: ClockPanel Project
"""

import mimetypes
from dataclasses import dataclass

from .selected_file import SelectedFile


@dataclass(frozen=True)
class UploadRequest:
    """
    One file upload.

    The overwrite flag comes from a single checkbox, so every request built
    from one submission carries the same value.
    """
    content: bytes
    filename: str
    overwrite: bool

    @classmethod
    def from_selection(cls, selected: SelectedFile, overwrite: bool) -> "UploadRequest":
        return cls(content=selected.content, filename=selected.filename, overwrite=overwrite)

    @property
    def overwrite_field(self) -> str:
        """Overwrite flag as the device expects it in the form ("true"/"false")."""
        return "true" if self.overwrite else "false"

    @property
    def content_type(self) -> str:
        content_type, _ = mimetypes.guess_type(self.filename)
        return content_type or "application/octet-stream"
