"""
PNR Extractor - Finds the 10-digit Passenger Name Record
"""
from typing import Optional

from ..models.extraction_models import Candidate
from ..shared_utils.cascade import ExtractionContext, Strategy
from .base import FieldExtractor

PNR_LABEL = r'\bPNR(?:\s*No\.?|\s*Number)?\s*[:\-]?'
PNR_VALUE = r'(?<!\d)(?P<value>\d{10})(?!\d)'


class PnrExtractor(FieldExtractor):
    """Labelled PNR first, then the first standalone 10-digit run."""

    field_name = 'pnr'

    def strategies(self):
        return [
            Strategy('label_inline', self._label_inline),
            Strategy('label_next_line', self._label_next_line),
            Strategy('standalone_digits', self._standalone_digits),
        ]

    def _label_inline(self, context: ExtractionContext) -> Optional[Candidate]:
        found = self.pattern_matcher.find_first_line(context.lines, PNR_LABEL + r'\s*' + PNR_VALUE)
        if found:
            index, match = found
            return Candidate(match.group('value'), 0, index)
        return None

    def _label_next_line(self, context: ExtractionContext) -> Optional[Candidate]:
        found = self.pattern_matcher.find_labeled_value(
            context.lines, PNR_LABEL, PNR_VALUE, lookahead=context.config.label_lookahead
        )
        if found:
            return Candidate(found.value, 1, found.line_index)
        return None

    def _standalone_digits(self, context: ExtractionContext) -> Optional[Candidate]:
        found = self.pattern_matcher.find_first_line(context.lines, r'\b(?P<value>\d{10})\b')
        if found:
            index, match = found
            return Candidate(match.group('value'), 2, index)
        return None
