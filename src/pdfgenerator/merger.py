"""PDF merger for composing rendered documents into one."""

import logging
from io import BytesIO
from pathlib import Path
from typing import Sequence

from pypdf import PdfReader, PdfWriter

from pdfgenerator.errors import PdfGeneratorError

logger = logging.getLogger(__name__)


class MergeError(PdfGeneratorError):
    """Error raised when PDF merging fails."""

    pass


def merge_pdfs(buffers: Sequence[bytes]) -> bytes:
    """
    Merge PDF documents held in memory, in the order provided.

    The first document is the base: its metadata is kept and the pages
    of every following document are appended after its own.

    Args:
        buffers: Complete PDF documents (in merge order).

    Returns:
        The merged PDF document.

    Raises:
        MergeError: If no buffers are given or any of them is not a PDF.
    """
    if not buffers:
        raise MergeError("At least one PDF buffer is required")

    try:
        writer = PdfWriter(clone_from=PdfReader(BytesIO(buffers[0])))
        logger.debug("Base document has %d pages", len(writer.pages))

        for index, buffer in enumerate(buffers[1:], start=2):
            reader = PdfReader(BytesIO(buffer))
            for page in reader.pages:
                writer.add_page(page)
            logger.debug("Added %d pages from document %d", len(reader.pages), index)

        output = BytesIO()
        writer.write(output)

        logger.info("Merged %d PDFs (%d pages)", len(buffers), len(writer.pages))
        return output.getvalue()

    except Exception as e:
        logger.error("Failed to merge PDFs: %s", e)
        raise MergeError(f"Failed to merge PDFs: {e}") from e


def merge_pdf_files(
    input_paths: Sequence[Path | str],
    output_path: Path | str,
) -> Path:
    """
    Merge PDF files on disk in the order provided.

    Args:
        input_paths: Paths to input PDFs (in merge order).
        output_path: Path for the merged output PDF.

    Returns:
        Path to the merged PDF file.

    Raises:
        MergeError: If no paths are given or merging fails.
        FileNotFoundError: If any input file doesn't exist.
    """
    if not input_paths:
        raise MergeError("At least one input PDF path is required")

    input_paths = [Path(p) for p in input_paths]
    output_path = Path(output_path)

    # Validate all input files exist
    for path in input_paths:
        if not path.exists():
            raise FileNotFoundError(f"PDF not found: {path}")

    merged = merge_pdfs([path.read_bytes() for path in input_paths])

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(merged)

    logger.info("Wrote merged PDF to %s", output_path)
    return output_path


def count_pages(buffer: bytes) -> int:
    """Number of pages in a PDF document."""
    try:
        return len(PdfReader(BytesIO(buffer)).pages)
    except Exception as e:
        raise MergeError(f"Not a readable PDF: {e}") from e
