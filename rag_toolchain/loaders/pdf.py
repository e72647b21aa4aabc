"""PDF loader using PyPDF2."""

from typing import List
import logging

import PyPDF2

from .base import FileSource

logger = logging.getLogger(__name__)


class PdfFileSource(FileSource):
    """Load a PDF as one string per page; blank pages are skipped."""

    def load(self) -> List[str]:
        """
        Extract page text.

        Returns:
            List of page texts in page order

        Raises:
            FileNotFoundError: If PDF not found
            ValueError: If PDF invalid
        """
        self._check_exists()
        pages = []

        try:
            with open(self.path, 'rb') as f:
                pdf_reader = PyPDF2.PdfReader(f)
                for page_num, page in enumerate(pdf_reader.pages, start=1):
                    text = page.extract_text() or ''
                    if text.strip():
                        pages.append(text)
                    else:
                        logger.debug("Skipping empty page %d of %s", page_num, self.path)
        except PyPDF2.errors.PdfReadError as e:
            raise ValueError(f"Invalid PDF: {e}") from e

        return pages
