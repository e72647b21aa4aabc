"""Tests for character-window chunking."""

import pytest

from rag_toolchain.chunkers import CharacterChunker, ChunkOverlapTooLarge


def test_two_character_windows():
    text = "This is a test string"
    chunks = CharacterChunker(2, 1).generate_chunks(text)

    assert len(chunks) == len(text)
    assert [c.content for c in chunks[:4]] == ["Th", "hi", "is", "s "]
    assert chunks[-2].content == "ng"
    assert chunks[-1].content == "g"


def test_whitespace_is_preserved():
    chunks = CharacterChunker(3, 0).generate_chunks(" ab cd ")
    assert [c.content for c in chunks] == [" ab", " cd", " "]


def test_empty_text():
    assert CharacterChunker(5, 2).generate_chunks("") == []


def test_no_model_limit():
    chunker = CharacterChunker(100000, 10)
    assert [c.content for c in chunker.generate_chunks("short")] == ["short"]


def test_overlap_not_smaller_than_size_is_rejected():
    with pytest.raises(ChunkOverlapTooLarge, match="chunk_overlap cannot be greater than or equal"):
        CharacterChunker(3, 3)


def test_invalid_sizes():
    with pytest.raises(ValueError):
        CharacterChunker(0, 0)
    with pytest.raises(ValueError):
        CharacterChunker(3, -1)
