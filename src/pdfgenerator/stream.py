"""Read streams over temporary PDF files."""

import io
import logging
import secrets
import time
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


def temp_file_name() -> str:
    """Unique-enough file name for a rendered PDF: timestamp plus random suffix."""
    return f"pdf_{time.time_ns()}_{secrets.token_hex(4)}.pdf"


def remove_quietly(path: Path) -> None:
    """
    Delete a temporary file, logging instead of raising on failure.

    Cleanup is advisory: files orphaned by a crash are left for an
    external reaper.
    """
    try:
        path.unlink(missing_ok=True)
        logger.debug("Removed temp file %s", path)
    except OSError as e:
        logger.warning("Could not remove temp file %s: %s", path, e)


class PdfStream(io.BufferedReader):
    """
    Binary read stream over a rendered PDF that deletes the file on close.

    Usage:
        with await generator.generate_pdf_stream() as stream:
            for chunk in stream.iter_chunks():
                response.write(chunk)
    """

    def __init__(self, path: Path | str, buffer_size: int = io.DEFAULT_BUFFER_SIZE):
        self.path = Path(path)
        super().__init__(io.FileIO(self.path, "rb"), buffer_size)

    def iter_chunks(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the remaining bytes in chunks of at most chunk_size."""
        while chunk := self.read(chunk_size):
            yield chunk

    def close(self) -> None:
        if self.closed:
            return
        try:
            super().close()
        finally:
            remove_quietly(self.path)
