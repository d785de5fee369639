"""
Ticket Extractor - Record assembler

Runs every field extractor over one reconstructed text, merges their outputs
into a TicketRecord and reports one diagnostic event per field:

    ok   "<field>: <value> [<strategy>]"
    warn "<field>: not found"
    err  "<field>: extractor failed: ..."

Extractors are independent and write disjoint fields, so their order does
not change the result.
"""
import hashlib
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..config.config_manager import ConfigManager, ExtractionConfig
from ..exceptions import TicketInputError
from ..extraction.field_extractors import (
    ArrivalExtractor,
    ClassExtractor,
    DateOfJourneyExtractor,
    DepartureTimeExtractor,
    PassengerExtractor,
    PnrExtractor,
    QuotaExtractor,
    StationExtractor,
    TrainExtractor,
    booking_date_extractor,
    distance_extractor,
    fare_extractor,
    station_code,
    transaction_id_extractor
)
from ..extraction.models import Candidate, TicketRecord
from ..extraction.shared_utils import ExtractionContext, NullSink, PatternMatcher, TextCleaner
from ..extraction.shared_utils.diagnostics import ERR, INFO, OK, WARN, DiagnosticSink
from ..reconstruction.pdf_source import PdfSource, extract_pdf_text, load_pdf_bytes

logger = logging.getLogger(__name__)

# Extractors whose candidate value is a tuple spread over several record fields
_FIELD_TARGETS = {
    'train': ('train_no', 'train_name'),
    'stations': ('from_station', 'to_station'),
}


def temporary_record_id(text: str) -> str:
    """Deterministic id for a ticket without a PNR."""
    digest = hashlib.sha1((text or '').encode('utf-8')).hexdigest()[:12]
    return f"tmp-{digest}"


class TicketExtractor:
    """
    Pure ``(text, config) -> TicketRecord`` engine.

    Args:
        config: ExtractionConfig to use; loaded through ConfigManager when None
        sink: Default diagnostic sink; NullSink when None
        config_path: Override file for ConfigManager (ignored when config is given)
    """

    def __init__(self, config: ExtractionConfig = None, sink: DiagnosticSink = None, config_path=None):
        if config is None:
            config = ConfigManager(config_path).extraction_config
        self.config = config
        self.sink = sink if sink is not None else NullSink()

        shared = {'pattern_matcher': PatternMatcher(), 'text_cleaner': TextCleaner()}
        self.text_cleaner = shared['text_cleaner']
        self.extractors = [
            PnrExtractor(**shared),
            TrainExtractor(**shared),
            StationExtractor(**shared),
            ClassExtractor(**shared),
            QuotaExtractor(**shared),
            DateOfJourneyExtractor(**shared),
            DepartureTimeExtractor(**shared),
            ArrivalExtractor(**shared),
            distance_extractor(**shared),
            fare_extractor(**shared),
            booking_date_extractor(**shared),
            transaction_id_extractor(**shared),
            PassengerExtractor(**shared),
        ]
        logger.debug(f"Initialized ticket extractor with {len(self.extractors)} field extractors")

    def build_context(self, text: str, sink: DiagnosticSink = None) -> ExtractionContext:
        return ExtractionContext(
            lines=self.text_cleaner.split_lines(text),
            text=text or '',
            config=self.config,
            sink=sink if sink is not None else self.sink,
        )

    def extract(self, text: str, meta: Dict[str, Any] = None, sink: DiagnosticSink = None) -> TicketRecord:
        """
        Parse reconstructed ticket text into a TicketRecord.

        Args:
            text: Newline-separated text in reading order
            meta: Caller-supplied metadata, attached unchanged
            sink: Diagnostic sink for this call (defaults to the instance sink)

        Returns:
            TicketRecord; fields that could not be found are None
        """
        context = self.build_context(text, sink)
        sink = context.sink
        record = TicketRecord(meta=dict(meta or {}))
        sink.record(INFO, f"Parsing {len(context.lines)} lines")

        for extractor in self.extractors:
            field_name = extractor.field_name
            try:
                candidate = extractor.extract(context)
            except Exception as e:
                logger.exception(f"❌ {field_name} extractor failed")
                sink.record(ERR, f"{field_name}: extractor failed: {e}")
                continue

            for target, value in self._apply(record, field_name, candidate):
                if value is None:
                    sink.record(WARN, f"{target}: not found")
                else:
                    sink.record(OK, f"{target}: {value} [{candidate.strategy}]")

        self._derive(record, context.text)
        return record

    def _apply(self, record: TicketRecord, field_name: str,
               candidate: Optional[Candidate]) -> List[Tuple[str, Any]]:
        """Write one candidate into the record; returns ``(field, reported value)`` pairs."""
        if field_name == 'passengers':
            record.passengers = list(candidate.value) if candidate else []
            return [('passengers', len(record.passengers) or None)]

        targets = _FIELD_TARGETS.get(field_name, (field_name,))
        if candidate is None:
            values = (None,) * len(targets)
        elif len(targets) == 1:
            values = (candidate.value,)
        else:
            values = tuple(candidate.value)

        for target, value in zip(targets, values):
            setattr(record, target, value)
        return list(zip(targets, values))

    def _derive(self, record: TicketRecord, text: str) -> None:
        if record.passengers:
            record.status = record.passengers[0].status or None
        record.from_code = station_code(record.from_station)
        record.to_code = station_code(record.to_station)
        record.record_id = record.pnr or temporary_record_id(text)

    def extract_from_pdf(self, source: PdfSource, max_workers: Optional[int] = 4,
                         sink: DiagnosticSink = None) -> TicketRecord:
        """
        Read a ticket PDF and parse it.

        Raises:
            TicketInputError: the PDF cannot be opened or has no text
        """
        pdf_bytes = load_pdf_bytes(source)
        try:
            text = extract_pdf_text(pdf_bytes, self.config, max_workers=max_workers)
        except TicketInputError as e:
            if e.source is None and not isinstance(source, (bytes, bytearray)):
                e.source = str(source)
            raise
        return self.extract(text, meta=build_meta(source, pdf_bytes), sink=sink)


def build_meta(source: PdfSource, pdf_bytes: bytes) -> Dict[str, Any]:
    """File name, byte size and extraction timestamp of a parsed PDF."""
    file_name = None if isinstance(source, (bytes, bytearray)) else Path(source).name
    return {
        'file_name': file_name,
        'size': len(pdf_bytes),
        'extracted_at': datetime.now(timezone.utc).isoformat(),
    }


# Global instance
_ticket_extractor = None


def get_ticket_extractor() -> TicketExtractor:
    """Get or create the default ticket extractor instance."""
    global _ticket_extractor
    if _ticket_extractor is None:
        _ticket_extractor = TicketExtractor()
    return _ticket_extractor
