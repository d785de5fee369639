"""
Date Extractor - Journey date, departure time and arrival
"""
import math
import re
from typing import Optional

from ..models.extraction_models import Candidate
from ..shared_utils.cascade import ExtractionContext, Strategy
from .base import FieldExtractor

MONTHS = r'(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sept?|Oct|Nov|Dec)[a-z]*'
DATE_PATTERN = (
    r'(?<!\d)(?:\d{1,2}[-/ ]' + MONTHS + r'[-/ ,]\s*\d{4}'
    r'|\d{1,2}[-/.]\d{1,2}[-/.]\d{4})(?!\d)'
)
TIME_PATTERN = r'(?<![\d:])(?:[01]?\d|2[0-3]):[0-5]\d(?!\d)'

JOURNEY_LABEL = r'\b(?:Date\s*of\s*Journey|Journey\s*Date|Start\s*Date|Departure)\b'
DATE_LABEL = r'\bDate\b'
BOOKING_LINE = r'\bBook(?:ed|ing)\b'
DEPARTURE_LABEL = r'\bDeparture\b'
ARRIVAL_LABEL = r'\bArrival\b'

DATE_VALUE = r'(?P<value>' + DATE_PATTERN + r')'
TIME_VALUE = r'(?P<value>' + TIME_PATTERN + r')'
ARRIVAL_VALUE = (
    r'(?P<value>' + TIME_PATTERN + r'(?:\s*(?:hrs?\.?)?\s*' + DATE_PATTERN + r')?'
    r'|' + DATE_PATTERN + r'(?:\s+' + TIME_PATTERN + r')?)'
)


class DateOfJourneyExtractor(FieldExtractor):
    """Journey-labelled date, then any non-booking ``Date`` label, then the first date near the top."""

    field_name = 'date_of_journey'

    def strategies(self):
        return [
            Strategy('journey_label', self._journey_label),
            Strategy('date_label', self._date_label),
            Strategy('document_head', self._document_head),
        ]

    def _journey_label(self, context: ExtractionContext) -> Optional[Candidate]:
        found = self.pattern_matcher.find_labeled_value(
            context.lines, JOURNEY_LABEL, DATE_VALUE, lookahead=context.config.label_lookahead
        )
        return Candidate(found.value, 0, found.line_index) if found else None

    def _date_label(self, context: ExtractionContext) -> Optional[Candidate]:
        booking = self.pattern_matcher.compile_pattern(BOOKING_LINE)
        found = self.pattern_matcher.find_labeled_value(
            context.lines, DATE_LABEL, DATE_VALUE,
            lookahead=context.config.label_lookahead,
            skip_line=lambda line: bool(booking.search(line)),
        )
        return Candidate(found.value, 1, found.line_index) if found else None

    def _document_head(self, context: ExtractionContext) -> Optional[Candidate]:
        head = max(1, math.ceil(len(context.lines) * context.config.date_head_ratio))
        found = self.pattern_matcher.find_first_line(context.lines[:head], DATE_VALUE)
        if found:
            index, match = found
            return Candidate(match.group('value'), 2, index)
        return None


class DepartureTimeExtractor(FieldExtractor):
    """``HH:MM`` on the Departure line or the next one, else a time printed beside a date."""

    field_name = 'departure_time'

    def strategies(self):
        return [
            Strategy('departure_label', self._departure_label),
            Strategy('time_beside_date', self._time_beside_date),
        ]

    def _departure_label(self, context: ExtractionContext) -> Optional[Candidate]:
        found = self.pattern_matcher.find_labeled_value(
            context.lines, DEPARTURE_LABEL, TIME_VALUE, lookahead=1
        )
        return Candidate(found.value, 0, found.line_index) if found else None

    def _time_beside_date(self, context: ExtractionContext) -> Optional[Candidate]:
        before_date = TIME_VALUE + r'\s*(?:hrs?\.?)?\s*' + DATE_PATTERN
        after_date = DATE_PATTERN + r'\s+' + TIME_VALUE
        for pattern in (before_date, after_date):
            found = self.pattern_matcher.find_first_line(context.lines, pattern)
            if found:
                index, match = found
                return Candidate(match.group('value'), 1, index)
        return None


class ArrivalExtractor(FieldExtractor):
    """Arrival time and/or date next to the Arrival label."""

    field_name = 'arrival'

    def strategies(self):
        return [Strategy('arrival_label', self._arrival_label)]

    def _arrival_label(self, context: ExtractionContext) -> Optional[Candidate]:
        lines = context.lines
        label = self.pattern_matcher.compile_pattern(ARRIVAL_LABEL)
        value = self.pattern_matcher.compile_pattern(ARRIVAL_VALUE)
        earlier_columns = self.pattern_matcher.compile_pattern(JOURNEY_LABEL)

        for index, line in enumerate(lines):
            label_match = label.search(line)
            if not label_match:
                continue
            same_line = value.search(line, label_match.end())
            if same_line:
                return Candidate(_squash(same_line.group('value')), 0, index)

            # Header row with values below: Arrival is the n-th time column
            column = len(earlier_columns.findall(line[:label_match.start()]))
            for offset in range(1, context.config.label_lookahead + 1):
                if index + offset >= len(lines):
                    break
                matches = list(value.finditer(lines[index + offset]))
                if len(matches) > column:
                    return Candidate(_squash(matches[column].group('value')), 0, index + offset)
        return None


def _squash(text):
    return re.sub(r'\s+', ' ', text).strip()
