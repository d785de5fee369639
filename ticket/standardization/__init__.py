"""
Ticket Standardization Module - Record presentation & export

Exports:
- station_code, status_category, display_value: Per-record display helpers
- matches_query, sort_records, merge_records: Record collection helpers
- records_to_frame, export_records_csv: Tabular export via pandas
"""

from .records import (
    PLACEHOLDER,
    TABLE_COLUMNS,
    display_value,
    export_records_csv,
    journey_datetime,
    matches_query,
    merge_records,
    records_to_frame,
    sort_records,
    station_code,
    status_category
)

__all__ = [
    'PLACEHOLDER',
    'TABLE_COLUMNS',
    'display_value',
    'export_records_csv',
    'journey_datetime',
    'matches_query',
    'merge_records',
    'records_to_frame',
    'sort_records',
    'station_code',
    'status_category'
]
