"""
Ticket Pipeline Module - Whole-document processing
"""
from .ticket_pipeline_service import TicketExtractionService

__all__ = ['TicketExtractionService']
