"""Shared fixtures: a reconstructed ERS ticket and fragment builders."""
import pytest

from ticket.config.config_manager import ExtractionConfig
from ticket.extraction.shared_utils import ExtractionContext, MemorySink, TextCleaner
from ticket.orchestration.ticket_extractor import TicketExtractor
from ticket.reconstruction.text_positions import TextFragment

SAMPLE_ERS_LINES = [
    "Electronic Reservation Slip (ERS)",
    "Booked from To",
    "AHMEDABAD JN (ADI) PUNE JN (PUNE)",
    "Start Date* 10-Jan-2025 Departure* 20:45 10-Jan-2025 Arrival* 05:30 11-Jan-2025",
    "PNR Train No./Name Class",
    "8523697410 12297/ADI PUNE DURONTO THIRD AC (3A)",
    "Quota Distance Booking Date",
    "GENERAL (GN) 627 KM 02-Jan-2025 11:32:45 HRS",
    "Passenger Details:",
    "# Name Age Gender Booking Status Current Status",
    "1. JOHN DOE 34 M CNF/A1/46/UPPER CNF/A1/46/UPPER",
    "2. JANE DOE 31 F CNF/A1/47/LOWER CNF/A1/47/LOWER",
    "Transaction ID: 100005678912345",
    "Total Fare (all inclusive) ₹ 1,850.00",
    "Please carry a valid identity proof. Beware of fraudulent customer calls.",
]

SAMPLE_ERS_TEXT = "\n".join(SAMPLE_ERS_LINES)


@pytest.fixture
def config():
    return ExtractionConfig()


@pytest.fixture
def sample_text():
    return SAMPLE_ERS_TEXT


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def extractor(config):
    return TicketExtractor(config=config)


@pytest.fixture
def make_context(config):
    """Build an ExtractionContext from raw lines (or one text blob)."""
    cleaner = TextCleaner()

    def _make(lines, extraction_config=None, sink=None):
        text = lines if isinstance(lines, str) else "\n".join(lines)
        kwargs = {}
        if sink is not None:
            kwargs['sink'] = sink
        return ExtractionContext(
            lines=cleaner.split_lines(text),
            text=text,
            config=extraction_config or config,
            **kwargs
        )
    return _make


@pytest.fixture
def make_fragments():
    """Lay out rows of words as fragments: one row per y, words spaced along x."""
    def _make(rows, top=800.0, line_height=14.0, word_width=60.0):
        fragments = []
        for row_index, words in enumerate(rows):
            y = top - row_index * line_height
            for word_index, word in enumerate(words):
                fragments.append(TextFragment(text=word, x=40.0 + word_index * word_width, y=y))
        return fragments
    return _make
