"""Recursive directory loading with format auto-detection."""

from pathlib import Path
from typing import Iterable, List, Optional
import logging

from .base import BaseLoader, SingleFileSource
from .docx import DocxFileSource
from .pdf import PdfFileSource

logger = logging.getLogger(__name__)


LOADER_MAP = {
    '.pdf': PdfFileSource,
    '.docx': DocxFileSource,
    '.md': SingleFileSource,
    '.txt': SingleFileSource,
}


def get_loader(path: str) -> BaseLoader:
    """
    Pick a loader for a file by its extension.

    Raises:
        ValueError: If the format is not supported
    """
    ext = Path(path).suffix.lower()
    if ext not in LOADER_MAP:
        raise ValueError(f"Unsupported format: {ext}")
    return LOADER_MAP[ext](path)


class DirectorySource(BaseLoader):
    """
    Load every supported file below a directory.

    Files that fail to load are logged and skipped.
    """

    def __init__(self, path: str, extensions: Optional[Iterable[str]] = None):
        self.path = Path(path)
        self.extensions = [e.lower() for e in (extensions or LOADER_MAP.keys())]

    def files(self) -> List[Path]:
        if not self.path.is_dir():
            raise FileNotFoundError(f"Directory not found: {self.path}")
        found = set()
        for ext in self.extensions:
            found.update(self.path.rglob(f"*{ext}"))
        return sorted(f for f in found if f.is_file())

    def load(self) -> List[str]:
        documents = []
        for file in self.files():
            try:
                documents.extend(get_loader(str(file)).load())
            except (OSError, ValueError) as e:
                logger.warning("Failed to load %s: %s", file, e)
        return documents
