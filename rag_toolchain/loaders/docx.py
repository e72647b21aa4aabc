"""DOCX loader using python-docx."""

from typing import List
from zipfile import BadZipFile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError

from .base import FileSource


class DocxFileSource(FileSource):
    """Load a Word document as a single string of its non-empty paragraphs."""

    def load(self) -> List[str]:
        self._check_exists()

        try:
            doc = Document(str(self.path))
        except (PackageNotFoundError, BadZipFile) as e:
            raise ValueError(f"Error reading DOCX: {e}") from e

        paragraphs = [para.text.strip() for para in doc.paragraphs]
        text = '\n'.join(p for p in paragraphs if p)
        return [text] if text else []
