"""
Models Package
"""
from .extraction_models import (
    SCALAR_FIELDS,
    Candidate,
    Passenger,
    TicketRecord
)

__all__ = [
    'SCALAR_FIELDS',
    'Candidate',
    'Passenger',
    'TicketRecord'
]
