"""Shared test fixtures."""

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest
import yaml

from skycast.config.schema import AppConfig, ProviderConfig

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def berlin_forecast() -> dict:
    with open(FIXTURE_DIR / "owm_forecast_berlin.json") as f:
        return json.load(f)


@pytest.fixture
def berlin_weather() -> dict:
    with open(FIXTURE_DIR / "owm_weather_berlin.json") as f:
        return json.load(f)


@pytest.fixture
def berlin_geocode() -> list:
    with open(FIXTURE_DIR / "owm_geocode_berlin.json") as f:
        return json.load(f)


@pytest.fixture
def berlin_now() -> datetime:
    """Mid-afternoon on 2026-06-01 in Berlin (UTC+2)."""
    return datetime(2026, 6, 1, 12, 30, tzinfo=UTC)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        provider=ProviderConfig(
            base_url="https://test-owm.example.com",
            api_key="test-key",
            max_retries=1,
            retry_base_delay=0.01,
        )
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "provider": {"api_key": "yaml-key"},
        "forecast": {"hourly_limit": 12},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
