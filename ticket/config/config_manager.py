"""
Configuration Manager for the Ticket Extraction Engine

ExtractionConfig is the immutable bundle of tunables and vocabularies every
extractor reads from. ConfigManager loads user overrides from JSON (or YAML)
and builds an ExtractionConfig from them.
"""
import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "ticket_extraction_config.json"


@dataclass(frozen=True)
class ExtractionConfig:
    """Tunables and vocabularies for one extraction run."""

    # Line reconstruction
    bucket_size: float = 4.0

    # Passenger table
    passenger_window: int = 25
    fallback_window: int = 200

    # Label helpers
    label_lookahead: int = 2
    date_head_ratio: float = 0.4

    status_vocabulary: Tuple[str, ...] = (
        'CNF', 'CONFIRMED', 'RAC', 'WL', 'RLWL', 'PQWL', 'RSWL', 'CAN', 'CANCL', 'CANX',
    )
    class_vocabulary: Tuple[str, ...] = (
        'FIRST AC', 'SECOND AC', 'THIRD AC', 'AC 3 ECONOMY', 'THIRD AC ECONOMY',
        'EXEC. CHAIR CAR', 'EXECUTIVE CHAIR CAR', 'AC CHAIR CAR', 'CHAIR CAR',
        'FIRST CLASS', 'SLEEPER', 'SECOND SITTING',
        '1A', '2A', '3A', '3E', 'EC', 'CC', 'FC', 'SL', '2S',
    )
    # (name, code) pairs
    quota_names: Tuple[Tuple[str, str], ...] = (
        ('GENERAL', 'GN'),
        ('PREMIUM TATKAL', 'PT'),
        ('TATKAL', 'TQ'),
        ('LADIES', 'LD'),
        ('LOWER BERTH', 'SS'),
        ('SENIOR CITIZEN', 'SS'),
        ('PHYSICALLY HANDICAPPED', 'HP'),
        ('DIVYAANG', 'HP'),
        ('DEFENCE', 'DF'),
        ('FOREIGN TOURIST', 'FT'),
        ('HEAD QUARTERS', 'HO'),
        ('DUTY PASS', 'DP'),
        ('YUVA', 'YU'),
    )
    boundary_keywords: Tuple[str, ...] = (
        'Class', 'Quota', 'Date', 'Departure', 'Arrival', 'Distance', 'Booking',
        'Booked', 'Boarding', 'PNR', 'Start', 'Reservation', 'Transaction', 'Fare',
    )
    non_station_codes: Tuple[str, ...] = (
        'UTS', 'GST', 'PNR', 'IRCTC', 'ERS', 'INR', 'KM', 'HRS', 'NTES', 'SMS',
        'CNF', 'RAC', 'RLWL', 'PQWL', 'RSWL', 'CANX', 'CANCL', 'TDR', 'PRS', 'OTP',
    )
    non_station_suffixes: Tuple[str, ...] = ('JN', 'JCT', 'SF', 'EXP', 'RD', 'CANTT')
    disclaimer_words: Tuple[str, ...] = (
        'please', 'discrepancy', 'note', 'kindly', 'refund', 'advised', 'carry',
        'valid', 'identity', 'proof', 'rules', 'charges', 'cancellation', 'beware',
        'customer', 'visit', 'subject', 'applicable', 'website',
    )
    passenger_stop_words: Tuple[str, ...] = (
        'Total', 'Fare', 'GST', 'Legends', 'Legend', 'Transaction', 'Convenience',
        'Insurance', 'Disclaimer', 'Important', 'Note',
    )

    def __post_init__(self):
        if self.bucket_size <= 0:
            raise ConfigurationError(f"bucket_size must be positive, got {self.bucket_size}")
        if self.passenger_window < 1:
            raise ConfigurationError(f"passenger_window must be at least 1, got {self.passenger_window}")
        if not 0 < self.date_head_ratio <= 1:
            raise ConfigurationError(f"date_head_ratio must be in (0, 1], got {self.date_head_ratio}")

    @property
    def quota_codes(self) -> Tuple[str, ...]:
        return tuple(sorted({code for _, code in self.quota_names}))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ExtractionConfig':
        """
        Build a config from a mapping, ignoring unknown keys.

        Lists become tuples; ``quota_names`` may be given as a ``{name: code}``
        mapping or as a list of ``[name, code]`` pairs.
        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown extraction config key: {key}")
                continue
            if key == 'quota_names':
                pairs = value.items() if isinstance(value, dict) else value
                value = tuple((str(name), str(code)) for name, code in pairs)
            elif isinstance(value, list):
                value = tuple(value)
            kwargs[key] = value
        return cls(**kwargs)

    def with_overrides(self, **overrides) -> 'ExtractionConfig':
        return replace(self, **overrides)


class ConfigManager:
    """Manages configuration loading for the extraction engine."""

    def __init__(self, config_path=None):
        if config_path is None:
            config_path = self._get_default_config_path()

        self.config_path = Path(config_path)
        self.config = self.load_configuration()
        self.extraction_config = ExtractionConfig.from_dict(self.config.get('extraction', {}))

    def _get_default_config_path(self):
        """Get default config path."""
        return os.path.join(os.path.dirname(__file__), DEFAULT_CONFIG_FILENAME)

    def load_configuration(self) -> Dict[str, Any]:
        """Load configuration from a JSON or YAML file."""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                if self.config_path.suffix.lower() in ('.yaml', '.yml'):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning(f"⚠️ Could not load config from {self.config_path}: {e}")
            return self._get_default_config()

        if not isinstance(data, dict):
            logger.warning(f"⚠️ Config {self.config_path} is not a mapping, using defaults")
            return self._get_default_config()
        return data

    def _get_default_config(self) -> Dict[str, Any]:
        """Provide default configuration if config file is not available."""
        return {'extraction': {}}

    def get_vocabulary(self, name):
        """Get one vocabulary (tuple) from the active extraction config."""
        return getattr(self.extraction_config, name)
