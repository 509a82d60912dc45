"""Document text extraction for uploaded résumés (PDF and plain text)."""

from io import BytesIO
from pathlib import Path

from pypdf import PdfReader

from .errors import ParseFailure, UnsupportedFormat
from .logger import get_logger
from .models import PDF_CONTENT_TYPE, TEXT_CONTENT_TYPE, ParsedText

SUPPORTED_CONTENT_TYPES = (PDF_CONTENT_TYPE, TEXT_CONTENT_TYPE)

_SUFFIX_CONTENT_TYPES = {
    ".pdf": PDF_CONTENT_TYPE,
    ".txt": TEXT_CONTENT_TYPE,
}


def _base_content_type(content_type: str) -> str:
    # "text/plain; charset=utf-8" -> "text/plain"
    return content_type.split(";", 1)[0].strip().lower()


def guess_content_type(filename: str) -> str:
    """Map a filename suffix to a supported content type, or octet-stream."""
    return _SUFFIX_CONTENT_TYPES.get(Path(filename).suffix.lower(), "application/octet-stream")


def parse_document(content: bytes, content_type: str, filename: str) -> ParsedText:
    """
    Extract plain text and a page count from an uploaded document.

    Args:
        content: Raw file bytes.
        content_type: Declared MIME type of the upload.
        filename: Original filename, used for diagnostics only.

    Returns:
        ParsedText with trimmed text. Scanned PDFs (image-only) return
        empty text; deciding whether that is an error is up to the caller.

    Raises:
        UnsupportedFormat: content type is not PDF or plain text.
        ParseFailure: the PDF stream could not be read.
    """
    logger = get_logger()
    base_type = _base_content_type(content_type)
    logger.info(
        "Starting text extraction",
        filename=filename,
        content_type=base_type,
        size_bytes=len(content),
    )

    if base_type not in SUPPORTED_CONTENT_TYPES:
        logger.warning("Unsupported content type", filename=filename, content_type=base_type)
        raise UnsupportedFormat(
            f"Unsupported content type {content_type!r}; only PDF and plain text are parsed",
            filename=filename,
        )

    if base_type == PDF_CONTENT_TYPE:
        return _parse_pdf(content, filename)
    return _parse_plain_text(content, filename)


def _parse_pdf(content: bytes, filename: str) -> ParsedText:
    logger = get_logger()
    try:
        reader = PdfReader(BytesIO(content))
        text_parts = []
        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
        page_count = len(reader.pages)
    except Exception as e:
        logger.error("PDF parsing failed", filename=filename, error=str(e))
        raise ParseFailure(f"Failed to parse PDF {filename!r}: {e}", filename=filename) from e

    text = "\n\n".join(text_parts).strip()
    if not text:
        logger.warning("PDF yielded empty text (scanned/image PDF?)", filename=filename, pages=page_count)

    logger.info("PDF parsed", filename=filename, pages=page_count, text_length=len(text))
    return ParsedText(text=text, page_count=page_count, content_type=PDF_CONTENT_TYPE)


def _parse_plain_text(content: bytes, filename: str) -> ParsedText:
    text = content.decode("utf-8", errors="replace").strip()
    get_logger().info("Plain text parsed", filename=filename, text_length=len(text))
    return ParsedText(text=text, page_count=1, content_type=TEXT_CONTENT_TYPE)
