"""Tests for PDF merging."""

import pytest

from pdfgenerator.merger import MergeError, count_pages, merge_pdf_files, merge_pdfs


def test_merge_page_count_and_order(make_pdf, page_texts):
    first = make_pdf("a1", "a2")
    second = make_pdf("b1")
    third = make_pdf("c1", "c2", "c3")

    merged = merge_pdfs([first, second, third])

    assert count_pages(merged) == 6
    assert page_texts(merged) == ["a1", "a2", "b1", "c1", "c2", "c3"]


def test_merge_single_buffer_is_identity(make_pdf, page_texts):
    original = make_pdf("only", "two")

    merged = merge_pdfs([original])

    assert merged.startswith(b"%PDF")
    assert page_texts(merged) == page_texts(original)


def test_merge_does_not_mutate_input(make_pdf):
    buffers = [make_pdf("one"), make_pdf("two")]
    before = list(buffers)

    merge_pdfs(buffers)

    assert buffers == before


def test_merge_empty_list_raises():
    with pytest.raises(MergeError, match="At least one"):
        merge_pdfs([])


def test_merge_rejects_non_pdf(make_pdf):
    with pytest.raises(MergeError) as exc_info:
        merge_pdfs([make_pdf("fine"), b"this is not a pdf"])
    assert exc_info.value.__cause__ is not None


def test_merge_rejects_non_pdf_base():
    with pytest.raises(MergeError):
        merge_pdfs([b"this is not a pdf"])


def test_merge_pdf_files(tmp_path, make_pdf, page_texts):
    first = tmp_path / "first.pdf"
    second = tmp_path / "second.pdf"
    first.write_bytes(make_pdf("first"))
    second.write_bytes(make_pdf("second", "third"))

    output = merge_pdf_files([first, str(second)], tmp_path / "out" / "merged.pdf")

    assert output.exists()
    assert page_texts(output.read_bytes()) == ["first", "second", "third"]


def test_merge_pdf_files_missing_input(tmp_path, make_pdf):
    existing = tmp_path / "exists.pdf"
    existing.write_bytes(make_pdf("x"))

    with pytest.raises(FileNotFoundError, match="missing.pdf"):
        merge_pdf_files([existing, tmp_path / "missing.pdf"], tmp_path / "out.pdf")


def test_merge_pdf_files_empty(tmp_path):
    with pytest.raises(MergeError):
        merge_pdf_files([], tmp_path / "out.pdf")


def test_count_pages_rejects_garbage():
    with pytest.raises(MergeError):
        count_pages(b"garbage")
