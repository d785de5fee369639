"""
Ticket Orchestration Module - Main API Entry Points

Exports:
- TicketExtractor: Record assembler running every field extractor
- get_ticket_extractor(): Get singleton instance
"""

from .ticket_extractor import (
    TicketExtractor,
    build_meta,
    get_ticket_extractor,
    temporary_record_id
)

__all__ = [
    'TicketExtractor',
    'build_meta',
    'get_ticket_extractor',
    'temporary_record_id'
]
