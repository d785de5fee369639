"""
Extraction Module - Field extractors and their shared utilities

📂 field_extractors/ - One cascade of strategies per ticket field
📂 models/ - Candidate, Passenger and TicketRecord
📂 shared_utils/ - Cascade runner, diagnostics, pattern matching, text cleaning
"""
from .models import Candidate, Passenger, TicketRecord
from .shared_utils import ExtractionContext, LoggingSink, MemorySink, NullSink, Strategy, run_cascade

__all__ = [
    'Candidate',
    'Passenger',
    'TicketRecord',
    'ExtractionContext',
    'LoggingSink',
    'MemorySink',
    'NullSink',
    'Strategy',
    'run_cascade'
]
