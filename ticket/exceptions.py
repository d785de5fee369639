"""
Exceptions raised by the ticket extraction engine.

Only whole-document failures surface to callers. Field-level problems are
recovered inside the extraction pipeline and reported as diagnostics.
"""


class TicketError(Exception):
    """Base class for all ticket extraction errors."""


class TicketInputError(TicketError):
    """The source document could not be turned into text (corrupt PDF, no text layer...)."""

    def __init__(self, message, source=None):
        super().__init__(message)
        self.source = source

    def __str__(self):
        base = super().__str__()
        if self.source:
            return f"{base} ({self.source})"
        return base


class ConfigurationError(TicketError):
    """An extraction configuration value is invalid."""
