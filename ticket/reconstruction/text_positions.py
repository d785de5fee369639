"""
Rebuild reading-order text from positioned PDF text fragments.

Fragments arrive in whatever order the renderer emitted them. Each page is
grouped into lines by snapping the baseline ``y`` to a coarse bucket, which
absorbs sub-pixel jitter between glyph runs on the same visual line. Lines
are read left to right and pages top to bottom (PDF user space: larger ``y``
is higher on the page).
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

DEFAULT_BUCKET_SIZE = 4.0


@dataclass(frozen=True)
class TextFragment:
    """A single glyph run with its position on the page."""
    text: str
    x: float
    y: float

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'TextFragment':
        return cls(text=str(data.get('text', '')), x=float(data['x']), y=float(data['y']))

    @property
    def is_blank(self) -> bool:
        return not self.text or not self.text.strip()


@dataclass
class ReconstructedLine:
    """Fragments sharing one vertical bucket, in reading order."""
    y: float
    page_number: int = 1
    fragments: List[TextFragment] = field(default_factory=list)

    def get_text(self, separator: str = " ") -> str:
        return separator.join(fragment.text.strip() for fragment in self.fragments)

    @property
    def text(self) -> str:
        return self.get_text()


FragmentLike = Union[TextFragment, Mapping[str, Any]]
PageInput = Tuple[int, Sequence[FragmentLike]]


def bucket_key(y: float, bucket_size: float = DEFAULT_BUCKET_SIZE) -> float:
    """Snap ``y`` to the nearest bucket, rounding halves upwards."""
    return math.floor(y / bucket_size + 0.5) * bucket_size


def _as_fragment(item: FragmentLike) -> TextFragment:
    if isinstance(item, TextFragment):
        return item
    return TextFragment.from_mapping(item)


def reconstruct_page_lines(
    fragments: Iterable[FragmentLike],
    bucket_size: float = DEFAULT_BUCKET_SIZE,
    page_number: int = 1
) -> List[ReconstructedLine]:
    """
    Group one page's fragments into lines.

    Args:
        fragments: Positioned fragments in extraction order
        bucket_size: Height of a vertical bucket in PDF units
        page_number: Page the fragments came from

    Returns:
        Lines sorted top to bottom, each sorted left to right
    """
    buckets = {}
    for item in fragments:
        fragment = _as_fragment(item)
        if fragment.is_blank:
            continue
        key = bucket_key(fragment.y, bucket_size)
        buckets.setdefault(key, []).append(fragment)

    lines = []
    for key in sorted(buckets, reverse=True):
        # sorted() is stable, so fragments at the same x keep extraction order
        ordered = sorted(buckets[key], key=lambda fragment: fragment.x)
        lines.append(ReconstructedLine(y=key, page_number=page_number, fragments=ordered))
    return lines


def reconstruct_lines(
    pages: Iterable[PageInput],
    bucket_size: float = DEFAULT_BUCKET_SIZE
) -> List[ReconstructedLine]:
    """Reconstruct lines for every page, concatenated in page-number order."""
    all_lines = []
    for page_number, fragments in sorted(pages, key=lambda page: page[0]):
        page_lines = reconstruct_page_lines(fragments, bucket_size, page_number)
        logger.debug(f"Page {page_number}: {len(page_lines)} lines")
        all_lines.extend(page_lines)
    return all_lines


def reconstruct_text(
    pages: Iterable[PageInput],
    bucket_size: float = DEFAULT_BUCKET_SIZE
) -> str:
    """Reconstruct the newline-joined document text from positioned fragments."""
    return '\n'.join(line.text for line in reconstruct_lines(pages, bucket_size))
