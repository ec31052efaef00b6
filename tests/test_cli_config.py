"""Tests for CLI configuration module."""

import json
import pytest
from pydantic import ValidationError
from cli.config import Config, default_config_path


def test_config_creates_default_file(tmp_path):
    """Test that config file is created with defaults if missing."""
    config_path = tmp_path / '.fss3' / 'config.json'
    config = Config(config_path)

    assert config_path.exists()

    assert config.data['concurrency'] == 5
    assert config.data['list_page_size'] == 1000
    assert config.data['link_expiry_seconds'] == 900
    assert config.data['poll_interval_seconds'] == 0.1


def test_config_loads_existing_file(tmp_path):
    """Test loading existing config file merged over defaults."""
    config_path = tmp_path / '.fss3' / 'config.json'
    config_path.parent.mkdir(parents=True)

    existing_data = {
        's3_endpoint_url': 'http://localhost:9000',
        'concurrency': 12,
    }
    with open(config_path, 'w') as f:
        json.dump(existing_data, f)

    config = Config(config_path)

    assert config.data['s3_endpoint_url'] == 'http://localhost:9000'
    assert config.data['concurrency'] == 12

    assert config.data['list_page_size'] == 1000
    assert config.data['link_expiry_seconds'] == 900


def test_config_ignores_unknown_keys(tmp_path):
    """Test that keys outside the settings model are dropped."""
    config_path = tmp_path / '.fss3' / 'config.json'
    config_path.parent.mkdir(parents=True)
    with open(config_path, 'w') as f:
        json.dump({'controller_host': 'example.com', 'concurrency': 2}, f)

    config = Config(config_path)

    assert 'controller_host' not in config.data
    assert config.data['concurrency'] == 2


def test_config_set_persists(temp_config):
    """Test setting and saving a value."""
    temp_config.set('concurrency', 8)

    assert temp_config.get_settings().concurrency == 8

    with open(temp_config.config_path, 'r') as f:
        data = json.load(f)
    assert data['concurrency'] == 8


def test_config_set_rejects_invalid_value(temp_config):
    """Test that invalid values are rejected and not saved."""
    with pytest.raises(ValidationError):
        temp_config.set('concurrency', 0)

    assert temp_config.get_settings().concurrency == 5


def test_config_handles_corrupted_file(tmp_path):
    """Test recovery from corrupted config file."""
    config_path = tmp_path / '.fss3' / 'config.json'
    config_path.parent.mkdir(parents=True)

    with open(config_path, 'w') as f:
        f.write('{ invalid json content')

    config = Config(config_path)
    assert config.data['concurrency'] == 5

    backup_path = config_path.with_suffix('.json.bak')
    assert backup_path.exists()


def test_config_handles_invalid_values(tmp_path):
    """Test recovery from a config file that fails validation."""
    config_path = tmp_path / '.fss3' / 'config.json'
    config_path.parent.mkdir(parents=True)
    with open(config_path, 'w') as f:
        json.dump({'list_page_size': 5000}, f)

    config = Config(config_path)

    assert config.data['list_page_size'] == 1000
    assert config_path.with_suffix('.json.bak').exists()


def test_config_directory_created_if_missing(tmp_path):
    """Test that config directory is created if it doesn't exist."""
    config_path = tmp_path / 'nested' / 'deep' / '.fss3' / 'config.json'

    assert not config_path.parent.exists()

    config = Config(config_path)
    assert config_path.parent.exists()
    assert config_path.exists()


def test_default_config_path_override(monkeypatch, tmp_path):
    """Test FSS3_CONFIG environment override."""
    monkeypatch.setenv('FSS3_CONFIG', str(tmp_path / 'custom.json'))

    assert default_config_path() == tmp_path / 'custom.json'


def test_default_config_path_home(monkeypatch):
    """Test default location under the home directory."""
    monkeypatch.delenv('FSS3_CONFIG', raising=False)

    assert default_config_path().parts[-2:] == ('.fss3', 'config.json')
