"""Base loader interface: a source yields raw document strings."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List


class BaseLoader(ABC):
    """Abstract base for document sources."""

    @abstractmethod
    def load(self) -> List[str]:
        """
        Load the source.

        Returns:
            One string per document (or per page, for paged formats)
        """
        pass


class FileSource(BaseLoader):
    """A loader reading a single file from disk."""

    def __init__(self, path: str):
        self.path = Path(path)

    def _check_exists(self):
        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"


class SingleFileSource(FileSource):
    """Reads a UTF-8 text file as one document."""

    def load(self) -> List[str]:
        self._check_exists()
        with open(self.path, 'r', encoding='utf-8') as f:
            return [f.read()]
