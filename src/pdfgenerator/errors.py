"""Base error for the PDF generator."""


class PdfGeneratorError(Exception):
    """Base class for every error raised by pdfgenerator."""

    pass
