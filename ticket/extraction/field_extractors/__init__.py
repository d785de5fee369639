"""
Field Extractors Package
"""
from .base import FieldExtractor
from .identifier_extractor import PnrExtractor
from .train_extractor import TrainExtractor, split_train_name
from .class_extractor import ClassExtractor
from .quota_extractor import QuotaExtractor
from .date_extractor import ArrivalExtractor, DateOfJourneyExtractor, DepartureTimeExtractor
from .labeled_value_extractor import (
    LabeledValueExtractor,
    booking_date_extractor,
    distance_extractor,
    fare_extractor,
    transaction_id_extractor
)
from .station_extractor import StationExtractor, refine_station, station_code
from .passenger_extractor import ParserState, PassengerExtractor, decompose_status

__all__ = [
    'FieldExtractor',
    'PnrExtractor',
    'TrainExtractor',
    'split_train_name',
    'ClassExtractor',
    'QuotaExtractor',
    'ArrivalExtractor',
    'DateOfJourneyExtractor',
    'DepartureTimeExtractor',
    'LabeledValueExtractor',
    'booking_date_extractor',
    'distance_extractor',
    'fare_extractor',
    'transaction_id_extractor',
    'StationExtractor',
    'refine_station',
    'station_code',
    'ParserState',
    'PassengerExtractor',
    'decompose_status'
]
