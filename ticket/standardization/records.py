"""
Record utilities - Route codes, status badges, search, sort and CSV export

Everything here works on finished TicketRecords; nothing feeds back into
extraction.
"""
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

import dateparser
import pandas as pd

from ..extraction.field_extractors.station_extractor import station_code
from ..extraction.models import TicketRecord

logger = logging.getLogger(__name__)

PLACEHOLDER = '—'

# Badge categories, checked in this order
_STATUS_CATEGORIES = (
    ('cnf', r'CNF|CONFIRMED'),
    ('wl', r'WL'),
    ('rac', r'RAC'),
    ('can', r'CAN'),
)

TABLE_COLUMNS = [
    'date', 'time', 'from_code', 'to_code', 'from_station', 'to_station',
    'train', 'class', 'pnr', 'status', 'passengers',
]


def status_category(status: Optional[str]) -> str:
    """Badge category of a booking status: cnf, wl, rac, can or unknown."""
    if not status:
        return 'unknown'
    for category, pattern in _STATUS_CATEGORIES:
        if re.search(pattern, status, re.IGNORECASE):
            return category
    return 'unknown'


def display_value(value) -> str:
    if value is None or value == '':
        return PLACEHOLDER
    return str(value)


def matches_query(record: TicketRecord, query: str) -> bool:
    """Case-insensitive search over PNR, passenger names, origin and destination."""
    query = (query or '').strip().lower()
    if not query:
        return True
    haystacks = [record.pnr, record.from_station, record.to_station]
    haystacks.extend(passenger.name for passenger in record.passengers)
    return any(query in (text or '').lower() for text in haystacks)


def journey_datetime(record: TicketRecord) -> Optional[datetime]:
    """Journey date plus departure time, or None when the date is missing or unparseable."""
    if not record.date_of_journey:
        return None
    raw = record.date_of_journey
    if record.departure_time:
        raw = f"{raw} {record.departure_time}"
    try:
        return dateparser.parse(raw, settings={'DATE_ORDER': 'DMY'})
    except Exception as e:
        logger.debug(f"Unparseable journey date {raw!r}: {e}")
        return None


def sort_records(records: Iterable[TicketRecord], descending: bool = False) -> List[TicketRecord]:
    """Sort by journey datetime; records without one keep their order at the end."""
    keyed = [(journey_datetime(record), record) for record in records]
    dated = sorted((pair for pair in keyed if pair[0] is not None),
                   key=lambda pair: pair[0], reverse=descending)
    return [record for _, record in dated] + [record for when, record in keyed if when is None]


def merge_records(records: Iterable[TicketRecord], record: TicketRecord) -> List[TicketRecord]:
    """Insert a record, replacing any existing record with the same id."""
    merged = []
    replaced = False
    for existing in records:
        if not replaced and record.record_id and existing.record_id == record.record_id:
            merged.append(record)
            replaced = True
        else:
            merged.append(existing)
    if not replaced:
        merged.append(record)
    return merged


def _table_row(record: TicketRecord) -> dict:
    return {
        'date': display_value(record.date_of_journey),
        'time': display_value(record.departure_time),
        'from_code': display_value(record.from_code or station_code(record.from_station)),
        'to_code': display_value(record.to_code or station_code(record.to_station)),
        'from_station': display_value(record.from_station),
        'to_station': display_value(record.to_station),
        'train': display_value(record.train),
        'class': display_value(record.travel_class),
        'pnr': display_value(record.pnr),
        'status': display_value(record.status),
        'passengers': len(record.passengers),
    }


def records_to_frame(records: Iterable[TicketRecord]) -> pd.DataFrame:
    """One row per record with the table columns; missing values shown as the placeholder."""
    rows = [_table_row(record) for record in records]
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def export_records_csv(records: Iterable[TicketRecord], path) -> Path:
    """Write the record table to CSV and return the path written."""
    path = Path(path)
    df = records_to_frame(records)
    df.to_csv(path, index=False, encoding='utf-8')
    logger.info(f"✅ Exported {len(df)} tickets to {path}")
    return path
