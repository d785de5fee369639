"""
Ticket Reconstruction Module - Text Order Reconstruction

Reconstructs reading order from positioned PDF text:
- Bucket fragments into lines by baseline
- Sort lines top-to-bottom, fragments left-to-right
- Concatenate pages in page-number order

Exports:
- TextFragment, ReconstructedLine: Positioned text types
- reconstruct_lines, reconstruct_text: Normalizer entry points
- extract_pdf_pages, extract_pdf_text: PyMuPDF fragment source
"""

from .text_positions import (
    ReconstructedLine,
    TextFragment,
    bucket_key,
    reconstruct_lines,
    reconstruct_page_lines,
    reconstruct_text,
)
from .pdf_source import extract_pdf_pages, extract_pdf_text

__all__ = [
    'TextFragment',
    'ReconstructedLine',
    'bucket_key',
    'reconstruct_page_lines',
    'reconstruct_lines',
    'reconstruct_text',
    'extract_pdf_pages',
    'extract_pdf_text',
]
