import json
from importlib import resources

import pytest

from zny_config import load_positions, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for k in ("VATSIM_STATUS_URL", "ZNY_POSITIONS_FILE", "ZNY_ICON", "ZNY_HTTP_TIMEOUT"):
        monkeypatch.delenv(k, raising=False)
    monkeypatch.setattr("zny_config.load_dotenv", lambda *a, **kw: False)


def test_bundled_positions():
    positions = load_positions()
    callsigns = [p.callsign for p in positions]
    assert "JFK_TWR" in callsigns
    assert "NY_CTR" in callsigns
    assert len(callsigns) == len(set(callsigns))


def test_positions_file(tmp_path):
    path = tmp_path / "positions.json"
    path.write_text(json.dumps([
        {"callsign": "JFK_TWR", "name": "JFK Tower", "radioName": "Kennedy Tower", "frequency": 119.1,
         "eramConfiguration": {"sectorId": ""}, "starsConfiguration": {"subset": 1, "sectorId": "T"}},
    ]))
    (p,) = load_positions(str(path))
    assert p.callsign == "JFK_TWR"


def test_positions_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_positions(str(tmp_path / "nope.json"))


@pytest.mark.parametrize("doc", [{"callsign": "JFK_TWR"}, [{"name": "no callsign"}], ["JFK_TWR"]])
def test_positions_bad_shape(tmp_path, doc):
    path = tmp_path / "positions.json"
    path.write_text(json.dumps(doc))
    with pytest.raises(ValueError):
        load_positions(str(path))


def test_settings_from_env(monkeypatch, tmp_path):
    path = tmp_path / "positions.json"
    path.write_text(json.dumps([{"callsign": "NY_CTR"}]))
    monkeypatch.setenv("ZNY_POSITIONS_FILE", str(path))
    monkeypatch.setenv("ZNY_HTTP_TIMEOUT", "3.5")
    monkeypatch.setenv("VATSIM_STATUS_URL", "http://localhost/status.json")

    settings = load_settings()
    assert [p.callsign for p in settings.positions] == ["NY_CTR"]
    assert settings.timeout == 3.5
    assert settings.status_url == "http://localhost/status.json"
    assert settings.registry.first.code == "KJFK"


def test_settings_arguments_win(monkeypatch):
    monkeypatch.setenv("ZNY_HTTP_TIMEOUT", "3.5")
    settings = load_settings(status_url="http://x/status.json", timeout=1)
    assert settings.timeout == 1
    assert settings.status_url == "http://x/status.json"


def test_settings_bad_timeout(monkeypatch):
    monkeypatch.setenv("ZNY_HTTP_TIMEOUT", "soon")
    with pytest.raises(ValueError):
        load_settings()


@pytest.mark.parametrize("doc", [[{"callsign": 42}], [{"callsign": None}], [{"callsign": "  "}]])
def test_positions_bad_callsign(tmp_path, doc):
    path = tmp_path / "positions.json"
    path.write_text(json.dumps(doc))
    with pytest.raises(ValueError):
        load_positions(str(path))


def test_positions_ship_as_package_data():
    res = resources.files("zny_data").joinpath("positions.json")
    assert res.is_file()
    bundled = [p["callsign"] for p in json.loads(res.read_text(encoding="utf-8"))]
    assert [p.callsign for p in load_positions()] == bundled


def test_settings_default_positions_do_not_depend_on_cwd(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    settings = load_settings()
    assert "JFK_TWR" in [p.callsign for p in settings.positions]
