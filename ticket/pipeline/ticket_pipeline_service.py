"""
Ticket Pipeline Service for whole-document ticket processing

Wraps the ticket extractor so callers get a plain result dict instead of
exceptions: PDF in, record dict plus diagnostic trace out.
"""
import logging
from typing import Any, Dict, Optional

from ..exceptions import TicketInputError
from ..extraction.shared_utils.diagnostics import MemorySink
from ..orchestration.ticket_extractor import TicketExtractor, get_ticket_extractor

logger = logging.getLogger(__name__)


class TicketExtractionService:
    """Service for processing ticket PDFs end to end"""

    def __init__(self, extractor: Optional[TicketExtractor] = None, max_workers: Optional[int] = 4):
        self.extractor = extractor or get_ticket_extractor()
        self.max_workers = max_workers

    def process_ticket(self, document_path) -> Dict[str, Any]:
        """
        Process one ticket PDF

        Args:
            document_path: Path to the ticket PDF (or its bytes)

        Returns:
            Dictionary with processing results
        """
        sink = MemorySink()
        try:
            logger.info("🔄 Processing ticket: %s", document_path if isinstance(document_path, str) else '<bytes>')
            record = self.extractor.extract_from_pdf(document_path, max_workers=self.max_workers, sink=sink)
            logger.info("✅ Ticket processing completed")

            return {
                'success': True,
                'error': None,
                'data': record.to_dict(),
                'diagnostics': [
                    {'timestamp': event.timestamp, 'level': event.level, 'message': event.message}
                    for event in sink.events
                ],
            }

        except TicketInputError as e:
            logger.error("❌ Ticket processing failed: %s", str(e))
            return {
                'success': False,
                'error': str(e),
                'data': {}
            }
