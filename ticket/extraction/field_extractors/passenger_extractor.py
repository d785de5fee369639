"""
Passenger Extractor - Rows of the passenger table

The table is read with a small state machine:

    SEARCHING_HEADER --header--> IN_TABLE --stop word / window end--> DONE

Rows are either ``seq. NAME age gender STATUS [STATUS]`` or the short form
``seq. NAME STATUS``. When no table row is found the whole text is scanned
for status tokens instead, each tied to the nearest numbered name before it.
"""
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from ...config.config_manager import ExtractionConfig
from ..models.extraction_models import Candidate, Passenger
from ..shared_utils.cascade import ExtractionContext, Strategy
from ..shared_utils.pattern_matcher import vocabulary_pattern
from .base import FieldExtractor

PASSENGER_HEADER = r'\bPassenger\s*Details?\b|\bS\.?\s*No\b.*\bName\b|\bSeq\b.*\bName\b'

GENDER = r'(?:MALE|FEMALE|TRANSGENDER|Male|Female|[MFT])'
ROW_FULL = (
    r"^(?P<seq>\d{1,2})\s*[.)]?\s+(?P<name>[A-Za-z][A-Za-z .'\-]*?)\s+"
    r"(?P<age>\d{1,3})\s*(?:Yrs?|YRS?)?\s+(?P<gender>" + GENDER + r")\s+"
    r"(?P<token>\S+)(?:\s+(?P<token2>\S+))?"
)
ROW_SHORT = (
    r"^(?P<seq>\d{1,2})\s*[.)]\s*(?P<name>[A-Za-z][A-Za-z .'\-]*?)\s+"
    r"(?P<token>%s(?:/\S*)?)(?=\s|$)"
)

NUMBERED_NAME = r"(?<![\d.])(?P<seq>\d{1,2})\.\s+(?P<name>[A-Z][A-Z .'\-]*[A-Z])"
AGE_GENDER = r'(?<!\d)(?P<age>\d{1,3})(?:\s+(?P<gender>' + GENDER + r'))?(?![A-Za-z0-9])'


class ParserState(Enum):
    SEARCHING_HEADER = 'searching_header'
    IN_TABLE = 'in_table'
    DONE = 'done'


def decompose_status(token: str, vocabulary: Iterable[str]) -> Tuple[str, str]:
    """
    Split a booking status token into ``(status, seat)``.

    ``CNF/A1/46/UPPER`` gives ``('CNF', 'A1/46/UPPER')``. A token whose first
    segment is not a known status is returned whole with an empty seat.
    """
    token = token.strip()
    known = {word.upper() for word in vocabulary}
    head, _, rest = token.partition('/')
    if head.upper() in known:
        return head.upper(), rest
    return token, ''


class PassengerExtractor(FieldExtractor):
    """Candidate value is the list of Passenger rows in table order."""

    field_name = 'passengers'

    def strategies(self):
        return [
            Strategy('passenger_table', self._passenger_table),
            Strategy('status_scan', self._status_scan),
        ]

    def _choose_status(self, tokens: List[str], config: ExtractionConfig) -> Tuple[str, str]:
        vocabulary = config.status_vocabulary
        known = {word.upper() for word in vocabulary}
        decomposed = [decompose_status(token, vocabulary) for token in tokens if token]

        chosen = next((item for item in decomposed if item[0] in known), decomposed[0])
        status, seat = chosen
        if seat:
            return status, seat

        # Borrow the seat from the other token; a token that is not a status is all seat
        for other_status, other_seat in decomposed:
            if (other_status, other_seat) == chosen:
                continue
            if other_seat:
                return status, other_seat
            if other_status.upper() not in known:
                return status, other_status
        return status, seat

    def parse_row(self, line: str, config: ExtractionConfig) -> Optional[Passenger]:
        """Parse one table row, or return None when the line is not a row."""
        full = self.pattern_matcher.search_pattern(line, ROW_FULL, flags=0)
        if full:
            status, seat = self._choose_status([full.group('token'), full.group('token2')], config)
            return Passenger(
                seq=full.group('seq'),
                name=full.group('name').strip(),
                age=full.group('age'),
                gender=full.group('gender'),
                status=status,
                seat=seat,
            )

        short_pattern = ROW_SHORT % vocabulary_pattern(config.status_vocabulary)
        short = self.pattern_matcher.search_pattern(line, short_pattern, flags=0)
        if short:
            status, seat = decompose_status(short.group('token'), config.status_vocabulary)
            return Passenger(seq=short.group('seq'), name=short.group('name').strip(),
                             status=status, seat=seat)
        return None

    def _passenger_table(self, context: ExtractionContext) -> Optional[Candidate]:
        config = context.config
        header = self.pattern_matcher.compile_pattern(PASSENGER_HEADER)
        stop = self.pattern_matcher.compile_pattern(vocabulary_pattern(config.passenger_stop_words))

        state = ParserState.SEARCHING_HEADER
        remaining = 0
        header_index = -1
        passengers: List[Passenger] = []
        seen = set()

        for index, line in enumerate(context.lines):
            if state is ParserState.SEARCHING_HEADER:
                if header.search(line):
                    state = ParserState.IN_TABLE
                    remaining = config.passenger_window
                    header_index = index
                continue

            if remaining <= 0 or stop.search(line):
                state = ParserState.DONE
                break
            remaining -= 1

            passenger = self.parse_row(line, config)
            if passenger and passenger.seq not in seen:
                seen.add(passenger.seq)
                passengers.append(passenger)

        if not passengers:
            return None
        return Candidate(passengers, 0, header_index)

    def _status_scan(self, context: ExtractionContext) -> Optional[Candidate]:
        config = context.config
        text = "\n".join(context.lines)
        status_token = self.pattern_matcher.compile_pattern(
            vocabulary_pattern(config.status_vocabulary) + r'(?:/[^\s]*)?', flags=0
        )
        numbered_name = self.pattern_matcher.compile_pattern(NUMBERED_NAME, flags=0)
        age_gender = self.pattern_matcher.compile_pattern(AGE_GENDER, flags=0)

        passengers: List[Passenger] = []
        seen = set()
        for match in status_token.finditer(text):
            window_start = max(0, match.start() - config.fallback_window)
            window = text[window_start:match.start()]
            names = list(numbered_name.finditer(window))
            if not names:
                continue
            nearest = names[-1]
            seq = nearest.group('seq')
            if seq in seen:
                continue

            age = gender = ''
            between = age_gender.search(window[nearest.end():])
            if between:
                age = between.group('age')
                gender = between.group('gender') or ''

            status, seat = decompose_status(match.group(0), config.status_vocabulary)
            seen.add(seq)
            passengers.append(Passenger(seq=seq, name=nearest.group('name').strip(), age=age,
                                        gender=gender, status=status, seat=seat))

        if not passengers:
            return None
        return Candidate(passengers, 1)
