"""
ClockPanel Client - Selected File Model

A file chosen by the user for upload: its name and its binary content.

Author: ClockPanel Project
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class SelectedFile:
    """One entry of the user's file selection."""
    filename: str
    content: bytes

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SelectedFile":
        """
        Read a local file into a SelectedFile.

        Args:
            path: Path of the local file

        Returns:
            SelectedFile named after the file's base name

        Raises:
            OSError: If the file cannot be read
        """
        path = Path(path)
        return cls(filename=path.name, content=path.read_bytes())
