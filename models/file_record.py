"""
Per-document record passed through the pipeline stages.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FileRecord:
    """
    One validated input document.

    Stages never modify a record in place; each one returns a new list of
    records built with ``dataclasses.replace``.

    Attributes:
        path: Location of the document; points into the target directory
              once the file has been copied
        page_count: Number of pages, incremented when a blank page is added
        byte_count: Size of the copied file, None until copied
    """

    path: str
    page_count: int
    byte_count: Optional[int] = None

    def __repr__(self) -> str:
        return f"<FileRecord {self.path} ({self.page_count} pages)>"
