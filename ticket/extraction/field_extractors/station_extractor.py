"""
Station Extractor - Origin and destination stations

Four strict tiers, each tried only when the previous one did not produce
both stations:

    0. "Booked from ... To" header with NAME (CODE) tokens on the next line
    1. One line carrying both From and To
    2. Independent Boarding/From and Reservation Upto/To labels
    3. Scan for NAME (CODE) tokens anywhere

Every raw value passes through refine_station before it is accepted.
"""
import re
from typing import List, Optional, Tuple

from ...config.config_manager import ExtractionConfig
from ..models.extraction_models import Candidate
from ..shared_utils.cascade import ExtractionContext, Strategy
from ..shared_utils.pattern_matcher import vocabulary_pattern
from ..shared_utils.text_cleaner import TextCleaner
from .base import FieldExtractor

BOOKED_FROM_HEADER = r'\bBooked\s+from\b.*\bTo\b'
FROM_TO_LINE = r'\bFrom\b\s*[:\-]?\s*(?P<origin>.+?)\s+\bTo\b\s*[:\-]?\s*(?P<destination>.+)$'
FROM_LABELS = (
    r'\bBoarding\s*At\b\s*[:\-]?',
    r'\bBoarding\s*Point\b\s*[:\-]?',
    r'\bBoarding\s*From\b\s*[:\-]?',
    r'\bFrom\b\s*[:\-]?',
)
TO_LABELS = (
    r'\bReservation\s*Up\s*to\b\s*[:\-]?',
    r'\bTo\b\s*[:\-]?',
)
STANDALONE_DIRECTION = r'(?<!\S)(?:to|from)(?!\S)'

# Uppercase name words followed by a parenthesised code, e.g. "PUNE JN (PUNE)"
STATION_TOKEN = r"(?P<name>[A-Z][A-Z.\-']*(?:[ \t]+[A-Z][A-Z.\-']*)*)\s*\((?P<code>[A-Z]{%d,5})\)"
TRAILING_CODE = r'\(\s*([A-Z0-9]{2,6})\s*\)\s*$'

StationPair = Tuple[Optional[str], Optional[str]]


def refine_station(
    candidate: Optional[str],
    config: ExtractionConfig,
    cleaner: TextCleaner = None
) -> Optional[str]:
    """
    Validate and tidy a raw station value.

    Returns the cleaned station name, or None when the value is prose,
    a disclaimer, or a bare non-station abbreviation.
    """
    if not candidate:
        return None
    cleaner = cleaner or TextCleaner()

    words = cleaner.clean_text_line(candidate).split()
    while words and any(ch.isdigit() for ch in words[0]):
        words.pop(0)
    text = cleaner.strip_edge_punctuation(" ".join(words))
    if not text:
        return None

    if cleaner.lowercase_ratio(" ".join(text.split()[:4])) > 0.5:
        return None

    text = cleaner.strip_edge_punctuation(cleaner.truncate_at_lowercase_word(text))
    if not any(ch.isalpha() for ch in text):
        return None

    words = text.split()
    disclaimer = set(config.disclaimer_words)
    if any(word.strip(".,:;!()").lower() in disclaimer for word in words):
        return None

    if len(words) == 1:
        lone = words[0].strip(".,()")
        if lone in config.non_station_suffixes or lone in config.non_station_codes:
            return None
    return text


def station_code(name: Optional[str]) -> Optional[str]:
    """Short code of a station: the trailing ``(CODE)``, else the first word."""
    if not name:
        return None
    match = re.search(TRAILING_CODE, name)
    if match:
        return match.group(1)
    words = name.split()
    return words[0] if words else None


class StationExtractor(FieldExtractor):
    """Candidate value is ``(from_station, to_station)``; either may be None."""

    field_name = 'stations'

    def strategies(self):
        return [
            Strategy('booked_from_header', self._pair_only(self._header_table)),
            Strategy('from_to_line', self._pair_only(self._single_line)),
            Strategy('labels', self._pair_only(self._label_anchored)),
            Strategy('code_scan', self._pair_only(self._code_scan)),
            Strategy('partial', self._partial),
        ]

    def _refine(self, value, context: ExtractionContext) -> Optional[str]:
        return refine_station(value, context.config, self.text_cleaner)

    def _pair_only(self, tier_function):
        def attempt(context: ExtractionContext) -> Optional[Candidate]:
            origin, destination, line_index = tier_function(context)
            if origin and destination:
                return Candidate((origin, destination), 0, line_index)
            return None
        return attempt

    def _partial(self, context: ExtractionContext) -> Optional[Candidate]:
        origin = destination = None
        line_index = -1
        for tier_function in (self._header_table, self._single_line,
                              self._label_anchored, self._code_scan):
            found_origin, found_destination, index = tier_function(context)
            if origin is None and found_origin:
                origin, line_index = found_origin, index
            if destination is None and found_destination:
                destination = found_destination
                if line_index < 0:
                    line_index = index
        if origin or destination:
            return Candidate((origin, destination), 0, line_index)
        return None

    def _truncate_at_boundary(self, value: str, config: ExtractionConfig) -> str:
        boundary = self.pattern_matcher.search_pattern(value, vocabulary_pattern(config.boundary_keywords))
        if boundary:
            value = value[:boundary.start()]
        direction = self.pattern_matcher.search_pattern(value, STANDALONE_DIRECTION)
        if direction:
            value = value[:direction.start()]
        return value.strip()

    def _header_table(self, context: ExtractionContext):
        lines = context.lines
        found = self.pattern_matcher.find_first_line(lines, BOOKED_FROM_HEADER)
        if not found or found[0] + 1 >= len(lines):
            return None, None, -1
        index = found[0] + 1

        tokens: List[str] = []
        for match in self.pattern_matcher.find_all_matches(lines[index], STATION_TOKEN % 2, flags=0):
            station = self._refine(match.group(0), context)
            if station and station not in tokens:
                tokens.append(station)

        # Booked-from, boarding, destination: boarding is the real origin
        if len(tokens) >= 3:
            return tokens[1], tokens[2], index
        if len(tokens) == 2:
            return tokens[0], tokens[1], index
        if len(tokens) == 1:
            return tokens[0], None, index
        return None, None, -1

    def _single_line(self, context: ExtractionContext):
        origin = destination = None
        for index, line in enumerate(context.lines):
            match = self.pattern_matcher.search_pattern(line, FROM_TO_LINE)
            if not match:
                continue
            found_origin = self._refine(match.group('origin'), context)
            found_destination = self._refine(
                self._truncate_at_boundary(match.group('destination'), context.config), context
            )
            if found_origin and found_destination:
                return found_origin, found_destination, index
            origin = origin or found_origin
            destination = destination or found_destination
        return origin, destination, -1

    def _label_value(self, context: ExtractionContext, label_patterns) -> Tuple[Optional[str], int]:
        lines = context.lines
        for label_pattern in label_patterns:
            label = self.pattern_matcher.compile_pattern(label_pattern)
            for index, line in enumerate(lines):
                match = label.search(line)
                if not match:
                    continue
                remainder = self._truncate_at_boundary(line[match.end():], context.config)
                if remainder:
                    value = self._refine(remainder, context)
                    if value:
                        return value, index
                    continue
                if index + 1 < len(lines):
                    value = self._refine(self._truncate_at_boundary(lines[index + 1], context.config), context)
                    if value:
                        return value, index + 1
        return None, -1

    def _label_anchored(self, context: ExtractionContext):
        origin, origin_index = self._label_value(context, FROM_LABELS)
        destination, destination_index = self._label_value(context, TO_LABELS)
        return origin, destination, origin_index if origin else destination_index

    def _code_scan(self, context: ExtractionContext):
        config = context.config
        blocked = set(config.non_station_codes)
        stations: List[str] = []
        first_index = -1

        for index, line in enumerate(context.lines):
            for match in self.pattern_matcher.find_all_matches(line, STATION_TOKEN % 3, flags=0):
                if match.group('code') in blocked or len(match.group('name').strip()) < 4:
                    continue
                station = self._refine(match.group(0), context)
                if station and station not in stations:
                    stations.append(station)
                    if first_index < 0:
                        first_index = index
                if len(stations) == 2:
                    return stations[0], stations[1], first_index

        if stations:
            return stations[0], None, first_index
        return None, None, -1
