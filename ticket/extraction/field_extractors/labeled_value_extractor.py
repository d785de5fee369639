"""
Labeled Value Extractors - Distance, fare, booking date and transaction ID

All four share one rule: find the label, read the value from the rest of the
line, else from the next lines. Only the label and value patterns differ.
"""
import re
from typing import Callable, Optional, Sequence

from ..models.extraction_models import Candidate
from ..shared_utils.cascade import ExtractionContext, Strategy
from .base import FieldExtractor
from .date_extractor import DATE_PATTERN, TIME_PATTERN

AMOUNT = r'\d{1,3}(?:,\d{2,3})+(?:\.\d{1,2})?|\d+(?:\.\d{1,2})?'


class LabeledValueExtractor(FieldExtractor):
    """
    Generic label-then-value extractor.

    Each label pattern is one strategy, tried in the given order.
    """

    def __init__(self, field_name: str, labels: Sequence[str], value_pattern: str,
                 normalize: Callable[[str], str] = None, **kwargs):
        super().__init__(**kwargs)
        self.field_name = field_name
        self.labels = tuple(labels)
        self.value_pattern = value_pattern
        self.normalize = normalize

    def strategies(self):
        return [
            Strategy(f'label_{tier}', self._make_attempt(label, tier))
            for tier, label in enumerate(self.labels)
        ]

    def _make_attempt(self, label: str, tier: int):
        def attempt(context: ExtractionContext) -> Optional[Candidate]:
            found = self.pattern_matcher.find_labeled_value(
                context.lines, label, self.value_pattern,
                lookahead=context.config.label_lookahead,
            )
            if not found:
                return None
            value = self.normalize(found.value) if self.normalize else found.value
            return Candidate(value, tier, found.line_index)
        return attempt


def _normalize_distance(value):
    return re.sub(r'\D', '', value) + ' KM'


def _normalize_amount(value):
    return value.replace(',', '')


def _squash(value):
    return re.sub(r'\s+', ' ', value).strip()


def distance_extractor(**kwargs) -> LabeledValueExtractor:
    return LabeledValueExtractor(
        'distance',
        [r'\bDistance\b'],
        r'(?<![\d.])(?P<value>\d{1,5}\s*KMS?)\b',
        normalize=_normalize_distance,
        **kwargs
    )


def fare_extractor(**kwargs) -> LabeledValueExtractor:
    return LabeledValueExtractor(
        'fare',
        [r'\bTotal\s*Fare\b', r'\bTicket\s*Fare\b', r'\bFare\b'],
        r'(?<![\d.,])(?:₹|Rs\.?|INR)?\s*(?P<value>' + AMOUNT + r')(?![\d,])',
        normalize=_normalize_amount,
        **kwargs
    )


def booking_date_extractor(**kwargs) -> LabeledValueExtractor:
    return LabeledValueExtractor(
        'booking_date',
        [r'\b(?:Booking\s*Date|Date\s*of\s*Booking|Booked\s*On)\b'],
        r'(?P<value>' + DATE_PATTERN + r'(?:\s+' + TIME_PATTERN + r'(?::\d{2})?(?:\s*HRS)?)?)',
        normalize=_squash,
        **kwargs
    )


def transaction_id_extractor(**kwargs) -> LabeledValueExtractor:
    return LabeledValueExtractor(
        'transaction_id',
        [r'\bTransaction\s*ID\b'],
        r'(?<!\d)(?P<value>\d{10,16})(?!\d)',
        **kwargs
    )
