import json

import pytest

from ticket.config import ConfigManager, ExtractionConfig
from ticket.exceptions import ConfigurationError


def test_defaults_are_tuples():
    config = ExtractionConfig()

    assert config.bucket_size == 4.0
    assert config.passenger_window == 25
    assert config.fallback_window == 200
    assert isinstance(config.status_vocabulary, tuple)
    assert 'TQ' in config.quota_codes


def test_config_is_hashable_and_frozen():
    config = ExtractionConfig()
    hash(config)
    with pytest.raises(AttributeError):
        config.bucket_size = 2.0


@pytest.mark.parametrize("overrides", [
    {'bucket_size': 0},
    {'passenger_window': 0},
    {'date_head_ratio': 1.5},
])
def test_invalid_values_raise(overrides):
    with pytest.raises(ConfigurationError):
        ExtractionConfig().with_overrides(**overrides)


def test_from_dict_converts_lists_and_ignores_unknown_keys(caplog):
    config = ExtractionConfig.from_dict({
        'bucket_size': 2.5,
        'status_vocabulary': ['CNF', 'WL'],
        'quota_names': {'GENERAL': 'GN'},
        'colour': 'blue',
    })

    assert config.bucket_size == 2.5
    assert config.status_vocabulary == ('CNF', 'WL')
    assert config.quota_names == (('GENERAL', 'GN'),)
    assert 'colour' in caplog.text


def test_from_dict_empty_gives_defaults():
    assert ExtractionConfig.from_dict(None) == ExtractionConfig()


def test_packaged_config_loads():
    manager = ConfigManager()
    assert manager.extraction_config == ExtractionConfig()
    assert manager.get_vocabulary('status_vocabulary') == ExtractionConfig().status_vocabulary


def test_json_override(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({'extraction': {'passenger_window': 10}}), encoding='utf-8')

    assert ConfigManager(path).extraction_config.passenger_window == 10


def test_yaml_override(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("extraction:\n  bucket_size: 3.0\n  disclaimer_words: [please, note]\n", encoding='utf-8')
    config = ConfigManager(path).extraction_config

    assert config.bucket_size == 3.0
    assert config.disclaimer_words == ('please', 'note')


def test_missing_file_falls_back_to_defaults(tmp_path, caplog):
    manager = ConfigManager(tmp_path / "missing.json")

    assert manager.config == {'extraction': {}}
    assert manager.extraction_config == ExtractionConfig()
    assert "Could not load config" in caplog.text


def test_non_mapping_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding='utf-8')
    assert ConfigManager(path).extraction_config == ExtractionConfig()
