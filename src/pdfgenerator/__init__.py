"""HTML to PDF generation.

This package provides:
- PdfGenerator (HTML content or files -> PDF bytes or a PDF stream)
- Multi-page rendering with per-page parameters
- PDF merging (rendered buffers or files -> one document)
"""

from pdfgenerator.config import Settings, settings
from pdfgenerator.errors import PdfGeneratorError
from pdfgenerator.generator import (
    FileReadError,
    MultiPageRenderError,
    PdfGenerator,
    render_pdf,
    render_pdf_to_file,
)
from pdfgenerator.log import configure_logging
from pdfgenerator.merger import MergeError, count_pages, merge_pdf_files, merge_pdfs
from pdfgenerator.models import Document, Margin, PageSpec, RenderOptions
from pdfgenerator.renderer import PlaywrightRenderer, RenderError
from pdfgenerator.stream import PdfStream

__version__ = "0.1.0"

__all__ = [
    # Generator
    "PdfGenerator",
    "render_pdf",
    "render_pdf_to_file",
    "PdfStream",
    "PlaywrightRenderer",
    # Models
    "Document",
    "Margin",
    "PageSpec",
    "RenderOptions",
    # Merger
    "merge_pdfs",
    "merge_pdf_files",
    "count_pages",
    # Errors
    "PdfGeneratorError",
    "FileReadError",
    "RenderError",
    "MultiPageRenderError",
    "MergeError",
    # Config
    "Settings",
    "settings",
    "configure_logging",
]
