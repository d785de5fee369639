"""
Cascade runner - ordered strategies per field, first valid result wins
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Tuple

from ...config.config_manager import ExtractionConfig
from ..models.extraction_models import Candidate
from .diagnostics import WARN, DiagnosticSink, NullSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionContext:
    """Read-only input shared by every extractor of one parse."""
    lines: Tuple[str, ...]
    text: str
    config: ExtractionConfig = field(default_factory=ExtractionConfig)
    sink: DiagnosticSink = field(default_factory=NullSink, compare=False)


@dataclass(frozen=True)
class Strategy:
    """One way of finding a field. ``attempt`` returns a Candidate or None."""
    name: str
    attempt: Callable[[ExtractionContext], Optional[Candidate]]


def run_cascade(
    field_name: str,
    strategies: Sequence[Strategy],
    context: ExtractionContext
) -> Optional[Candidate]:
    """
    Try strategies in order and return the first candidate.

    A strategy that raises counts as having found nothing; the failure is
    reported to the sink and the cascade moves on.
    """
    for tier, strategy in enumerate(strategies):
        try:
            candidate = strategy.attempt(context)
        except Exception as e:
            logger.debug(f"{field_name}/{strategy.name} raised", exc_info=True)
            context.sink.record(WARN, f"{field_name}: strategy {strategy.name} failed: {e}")
            continue

        if candidate is not None:
            return Candidate(
                value=candidate.value,
                tier=tier,
                line_index=candidate.line_index,
                strategy=strategy.name,
            )
    return None
