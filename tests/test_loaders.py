"""Tests for document sources."""

import pytest
from docx import Document

from rag_toolchain.loaders import (
    DirectorySource,
    DocxFileSource,
    PdfFileSource,
    SingleFileSource,
    get_loader,
)


def test_single_file_source(tmp_path):
    path = tmp_path / "note.txt"
    path.write_text("héllo\nworld", encoding="utf-8")

    assert SingleFileSource(str(path)).load() == ["héllo\nworld"]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SingleFileSource(str(tmp_path / "absent.txt")).load()


def test_docx_source(tmp_path):
    path = tmp_path / "report.docx"
    doc = Document()
    doc.add_heading("Findings", level=1)
    doc.add_paragraph("First paragraph.")
    doc.add_paragraph("")
    doc.add_paragraph("Second paragraph.")
    doc.save(str(path))

    assert DocxFileSource(str(path)).load() == ["Findings\nFirst paragraph.\nSecond paragraph."]


def test_invalid_docx(tmp_path):
    path = tmp_path / "broken.docx"
    path.write_bytes(b"not a zip file")

    with pytest.raises(ValueError):
        DocxFileSource(str(path)).load()


def test_get_loader_by_extension():
    assert isinstance(get_loader("a.pdf"), PdfFileSource)
    assert isinstance(get_loader("a.DOCX"), DocxFileSource)
    assert isinstance(get_loader("a.md"), SingleFileSource)
    with pytest.raises(ValueError, match="Unsupported format"):
        get_loader("a.xlsx")


def test_directory_source_skips_failures(tmp_path, caplog):
    (tmp_path / "sub").mkdir()
    (tmp_path / "a.txt").write_text("alpha", encoding="utf-8")
    (tmp_path / "sub" / "b.md").write_text("# beta", encoding="utf-8")
    (tmp_path / "broken.pdf").write_bytes(b"not a pdf")
    (tmp_path / "ignored.csv").write_text("x,y", encoding="utf-8")

    documents = DirectorySource(str(tmp_path)).load()

    assert sorted(documents) == ["# beta", "alpha"]
    assert "broken.pdf" in caplog.text


def test_directory_source_requires_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        DirectorySource(str(tmp_path / "missing")).load()
