"""
PDF fragment source backed by PyMuPDF.

Turns a ticket PDF into per-page lists of TextFragment. MuPDF is not thread
safe, so pages are decoded in worker processes; every worker opens its own
document from the PDF bytes and results are joined by page number, never by
completion order.
"""
import logging
import multiprocessing
from pathlib import Path
from typing import List, Optional, Tuple, Union

import fitz  # PyMuPDF

from ..config.config_manager import ExtractionConfig
from ..exceptions import TicketInputError
from .text_positions import TextFragment, reconstruct_text

logger = logging.getLogger(__name__)

PdfSource = Union[str, Path, bytes, bytearray]


def load_pdf_bytes(source: PdfSource) -> bytes:
    """Read a PDF from a path, or pass raw bytes through."""
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    try:
        return Path(source).read_bytes()
    except OSError as e:
        raise TicketInputError(f"Cannot read PDF: {e}", source=str(source)) from e


def _open_document(pdf_bytes: bytes) -> 'fitz.Document':
    try:
        return fitz.open(stream=pdf_bytes, filetype="pdf")
    except Exception as e:
        # PyMuPDF raises several unrelated types for corrupt input
        raise TicketInputError(f"Cannot open PDF: {e}") from e


def count_pages(pdf_bytes: bytes) -> int:
    doc = _open_document(pdf_bytes)
    try:
        return doc.page_count
    finally:
        doc.close()


def extract_page_fragments(pdf_bytes: bytes, page_index: int) -> List[TextFragment]:
    """
    Extract positioned spans from one page.

    ``y`` is flipped to PDF user space (origin at the bottom of the page) so
    that larger values are higher on the page.
    """
    doc = _open_document(pdf_bytes)
    try:
        page = doc.load_page(page_index)
        height = page.rect.height
        fragments = []
        for block in page.get_text("dict").get("blocks", []):
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    text = span.get("text", "")
                    if not text.strip():
                        continue
                    x, y = span["origin"]
                    fragments.append(TextFragment(text=text, x=float(x), y=float(height - y)))
        return fragments
    except TicketInputError:
        raise
    except Exception as e:
        raise TicketInputError(f"Cannot decode page {page_index + 1}: {e}") from e
    finally:
        doc.close()


def extract_pdf_pages(
    source: PdfSource,
    max_workers: Optional[int] = 4
) -> List[Tuple[int, List[TextFragment]]]:
    """
    Extract fragments for every page, in parallel worker processes.

    Args:
        source: PDF path or bytes
        max_workers: Worker processes (None: all cores but one); pages are
            decoded in this process when only one worker is needed

    Returns:
        ``(page_number, fragments)`` pairs with 1-based page numbers, sorted
        by page number
    """
    pdf_bytes = load_pdf_bytes(source)
    page_count = count_pages(pdf_bytes)
    if page_count == 0:
        raise TicketInputError("PDF has no pages", source=_describe(source))

    if max_workers is None:
        max_workers = max(1, multiprocessing.cpu_count() - 1)
    # Don't spawn more processes than pages
    num_processes = max(1, min(max_workers, page_count))

    tasks = [(pdf_bytes, index) for index in range(page_count)]
    if num_processes == 1:
        fragments_by_page = [extract_page_fragments(*task) for task in tasks]
    else:
        with multiprocessing.Pool(processes=num_processes) as pool:
            # starmap keeps task order, so index i is page i + 1
            fragments_by_page = pool.starmap(extract_page_fragments, tasks)

    results = {index + 1: fragments for index, fragments in enumerate(fragments_by_page)}
    logger.debug(f"Extracted {sum(len(f) for f in results.values())} fragments "
                 f"from {page_count} pages using {num_processes} process(es)")
    return [(page_number, results[page_number]) for page_number in sorted(results)]


def extract_pdf_text(
    source: PdfSource,
    config: Optional[ExtractionConfig] = None,
    max_workers: Optional[int] = 4
) -> str:
    """PDF → reading-order text. Raises TicketInputError when no text exists."""
    config = config or ExtractionConfig()
    pages = extract_pdf_pages(source, max_workers=max_workers)
    text = reconstruct_text(pages, config.bucket_size)
    if not text.strip():
        raise TicketInputError("PDF contains no extractable text", source=_describe(source))
    return text


def _describe(source: PdfSource) -> Optional[str]:
    if isinstance(source, (bytes, bytearray)):
        return None
    return str(source)
