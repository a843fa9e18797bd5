"""Tests for CLI commands."""

import json
from pathlib import Path

import httpx
import respx
import yaml

from skycast.cli import main
from skycast.config.loader import API_KEY_ENV, load_config

BASE = "https://test-owm.example.com"


def _config(tmp_path: Path, **provider) -> Path:
    path = tmp_path / "test.yaml"
    lines = [
        "provider:",
        f"  base_url: {BASE}",
        f"  api_key: '{provider.get('api_key', 'test-key')}'",
        "  max_retries: 0",
    ]
    path.write_text("\n".join(lines) + "\n")
    return path


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        result = main([])
        assert result == 1

    def test_config_show_masks_key(self, tmp_path: Path, capsys):
        result = main(["--config", str(_config(tmp_path)), "config", "show"])
        assert result == 0
        out = capsys.readouterr().out
        assert "test-key" not in out
        assert '"hourly_limit": 8' in out

    def test_config_set(self, tmp_path: Path, capsys):
        path = _config(tmp_path)
        result = main([
            "--config", str(path),
            "config", "set", "forecast.hourly_limit=4",
        ])
        assert result == 0
        assert "4" in capsys.readouterr().out

        saved = load_config(path)
        assert saved.forecast.hourly_limit == 4
        assert saved.provider.api_key == "test-key"
        assert (tmp_path / "test.yaml.bak").exists()

    def test_config_set_keeps_env_key_out_of_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV, "env-secret")
        path = _config(tmp_path, api_key="")
        result = main(["--config", str(path), "config", "set", "forecast.daily_max_days=5"])
        assert result == 0
        with open(path) as f:
            raw = yaml.safe_load(f)
        assert raw["forecast"]["daily_max_days"] == 5
        assert raw["provider"]["api_key"] == ""
        assert "env-secret" not in path.read_text()

    def test_config_set_invalid_value_leaves_file(self, tmp_path: Path, capsys):
        path = _config(tmp_path)
        before = path.read_text()
        result = main(["--config", str(path), "config", "set", "forecast.hourly_limit=99"])
        assert result == 1
        assert "Error" in capsys.readouterr().out
        assert path.read_text() == before

    def test_config_set_bad_format(self, tmp_path: Path, capsys):
        result = main(["--config", str(_config(tmp_path)), "config", "set", "novalue"])
        assert result == 1

    @respx.mock
    def test_forecast_daily_text(self, tmp_path: Path, capsys, berlin_forecast: dict):
        respx.get(f"{BASE}/data/2.5/forecast").mock(
            return_value=httpx.Response(200, json=berlin_forecast)
        )
        result = main([
            "--config", str(_config(tmp_path)),
            "forecast", "--lat", "52.52", "--lon", "13.405",
        ])
        assert result == 0
        out = capsys.readouterr().out
        assert "Berlin, DE" in out
        assert "Jun 1" in out and "Jun 2" in out

    @respx.mock
    def test_forecast_hourly_json(self, tmp_path: Path, capsys, berlin_forecast: dict):
        respx.get(f"{BASE}/data/2.5/forecast").mock(
            return_value=httpx.Response(200, json=berlin_forecast)
        )
        result = main([
            "--config", str(_config(tmp_path)),
            "forecast", "--lat", "52.52", "--lon", "13.405",
            "--type", "hourly", "--json",
        ])
        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data["hourly"]) == 8

    @respx.mock
    def test_forecast_upstream_error(self, tmp_path: Path, capsys):
        respx.get(f"{BASE}/data/2.5/forecast").mock(return_value=httpx.Response(500))
        result = main([
            "--config", str(_config(tmp_path)),
            "forecast", "--lat", "1", "--lon", "2",
        ])
        assert result == 1
        assert "500" in capsys.readouterr().out

    def test_forecast_missing_key(self, tmp_path: Path, capsys, monkeypatch):
        monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
        result = main([
            "--config", str(_config(tmp_path, api_key="")),
            "forecast", "--lat", "1", "--lon", "2",
        ])
        assert result == 1
        assert "API key" in capsys.readouterr().out

    @respx.mock
    def test_weather_with_name(self, tmp_path: Path, capsys, berlin_weather: dict):
        respx.get(f"{BASE}/data/2.5/weather").mock(
            return_value=httpx.Response(200, json=berlin_weather)
        )
        result = main([
            "--config", str(_config(tmp_path)),
            "weather", "--q", "Berlin", "--name", "Berlin",
        ])
        assert result == 0
        out = capsys.readouterr().out
        assert out.startswith("Berlin, DE")
        assert "18.0 kph" in out

    def test_weather_requires_location(self, tmp_path: Path, capsys):
        result = main(["--config", str(_config(tmp_path)), "weather"])
        assert result == 1

    @respx.mock
    def test_geocode(self, tmp_path: Path, capsys, berlin_geocode: list):
        respx.get(f"{BASE}/geo/1.0/direct").mock(
            return_value=httpx.Response(200, json=berlin_geocode)
        )
        result = main(["--config", str(_config(tmp_path)), "geocode", "Berlin"])
        assert result == 0
        assert "Berlin, Berlin, DE: 52.5170, 13.3889" in capsys.readouterr().out
