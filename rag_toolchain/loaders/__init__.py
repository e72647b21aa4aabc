"""Document sources feeding the indexing pipeline."""

from .base import BaseLoader, FileSource, SingleFileSource
from .pdf import PdfFileSource
from .docx import DocxFileSource
from .directory import LOADER_MAP, DirectorySource, get_loader

__all__ = [
    'BaseLoader',
    'FileSource',
    'SingleFileSource',
    'PdfFileSource',
    'DocxFileSource',
    'DirectorySource',
    'LOADER_MAP',
    'get_loader',
]
