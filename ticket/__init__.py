"""
Ticket Extraction Module - Railway Ticket Processing System

Organized into 6 functional components:

📂 reconstruction/ - Text order reconstruction
   ├─ reconstruct_lines / reconstruct_text: Bucket positioned fragments into lines
   └─ extract_pdf_pages / extract_pdf_text: PyMuPDF fragment source (process pool)

📂 extraction/ - Extract specific fields
   ├─ field_extractors/: PNR, train, class, quota, dates, stations, passengers...
   ├─ models/: Candidate, Passenger, TicketRecord
   └─ shared_utils/: Cascade runner, diagnostic sinks, pattern matcher, text cleaner

📂 orchestration/ - Main API entry points
   ├─ TicketExtractor: Record assembler
   └─ get_ticket_extractor(): Singleton accessor

📂 pipeline/ - Whole-document processing
   └─ TicketExtractionService: PDF in, result dict out

📂 standardization/ - Record presentation
   └─ status badges, search, sort, merge, CSV export (pandas)

📂 config/ - ExtractionConfig and ConfigManager (JSON / YAML)

QUICK START:
    from ticket import get_ticket_extractor

    extractor = get_ticket_extractor()
    record = extractor.extract_from_pdf("ticket.pdf")
    print(record.to_dict())
"""

from .config import ConfigManager, ExtractionConfig
from .exceptions import ConfigurationError, TicketError, TicketInputError
from .extraction import MemorySink, NullSink, Passenger, TicketRecord
from .extraction.shared_utils import LoggingSink
from .orchestration import TicketExtractor, get_ticket_extractor
from .pipeline import TicketExtractionService
from .reconstruction import TextFragment, extract_pdf_pages, extract_pdf_text, reconstruct_text

__version__ = "1.0.0"

__all__ = [
    'ConfigManager',
    'ExtractionConfig',
    'ConfigurationError',
    'TicketError',
    'TicketInputError',
    'LoggingSink',
    'MemorySink',
    'NullSink',
    'Passenger',
    'TicketRecord',
    'TicketExtractor',
    'get_ticket_extractor',
    'TicketExtractionService',
    'TextFragment',
    'extract_pdf_pages',
    'extract_pdf_text',
    'reconstruct_text'
]
