"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from dsmr.cli import cli

GOOD_STREAM = """\
/v10
1.1.0#(START)
2.1#(23-Jan-05 10:20:30 (W))
4.1#(E)
7.1.1#(230.1*V)
7.1.2#(231.2*V)
7.1.3#(229.8*V)
7.2.1#(1.5*A)
7.2.2#(2.5*A)
7.2.3#(3.5*A)
7.4.1#(1234.5*kWh)
3.1.2#(L)
3.2.2#(446F6F72)
3.3.2#(23-Jan-05 10:00:00 (W))
3.1.1#(H)
3.2.1#(4F766572766F6C74616765)
3.3.1#(23-Jan-05 09:00:00 (W))
1.2.0#(END)
"""

BAD_STREAM = """\
/v10
1.1.0#(START)
2.1#(23-Jan-05 10:20:30 (W))
7.1.1#(230.1*V)
1.2.0#(END)
"""


@pytest.fixture
def runner(monkeypatch, tmp_path):
    for var in ("DSMR_CONFIG", "DSMR_PARSE_FAILURE_EXIT_CODE", "DSMR_STANDARD_UTC_OFFSET"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def test_parse_json_from_stdin(runner):
    result = runner.invoke(cli, ["parse", "--json"], input=GOOD_STREAM)

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert len(data) == 1
    assert data[0]["timestamp"] == 1672910430
    assert data[0]["electricity"]["voltage"] == [230.1, 231.2, 229.8]
    assert [e["id"] for e in data[0]["event_log"]] == [1, 2]
    assert data[0]["event_log"][0]["severity"] == "high"
    assert data[0]["event_log"][0]["message"] == "Overvoltage"


def test_parse_table_from_file(runner, tmp_path):
    path = tmp_path / "telegrams.dsmr"
    path.write_text(GOOD_STREAM)

    result = runner.invoke(cli, ["parse", str(path)])

    assert result.exit_code == 0
    assert "Telegrams (1)" in result.output


def test_parse_failure_exit_code(runner):
    result = runner.invoke(cli, ["parse"], input=BAD_STREAM)

    assert result.exit_code == 42
    assert "Failed to parse" in result.output


def test_parse_failure_exit_code_from_config(runner, tmp_path):
    config = tmp_path / "dsmr.yaml"
    config.write_text("parse_failure_exit_code: 3\n")

    result = runner.invoke(cli, ["--config", str(config), "parse"], input=BAD_STREAM)

    assert result.exit_code == 3


def test_config_path_from_dotenv(runner, tmp_path):
    """DSMR_CONFIG can come from a .env file in the working directory."""
    config = tmp_path / "dsmr.yaml"
    config.write_text("parse_failure_exit_code: 3\n")
    (tmp_path / ".env").write_text(f"DSMR_CONFIG={config}\n")

    # listing the key in env makes the runner remove it again afterwards
    result = runner.invoke(cli, ["parse"], input=BAD_STREAM, env={"DSMR_CONFIG": None})

    assert result.exit_code == 3


def test_config_offsets_change_timestamps(runner, tmp_path):
    config = tmp_path / "dsmr.yaml"
    config.write_text("standard_utc_offset: 0\n")

    result = runner.invoke(cli, ["--config", str(config), "parse", "--json"], input=GOOD_STREAM)

    assert result.exit_code == 0
    assert json.loads(result.output)[0]["timestamp"] == 1672914030


def test_voltage_json(runner):
    result = runner.invoke(cli, ["voltage", "--json"], input=GOOD_STREAM)

    assert result.exit_code == 0
    assert json.loads(result.output) == [
        {"phase_1": 230.1, "phase_2": 231.2, "phase_3": 229.8, "timestamp": 1672910430}
    ]


def test_current_table(runner):
    result = runner.invoke(cli, ["current"], input=GOOD_STREAM)

    assert result.exit_code == 0
    assert "Current over time" in result.output


def test_events(runner):
    result = runner.invoke(cli, ["events", "--json"], input=GOOD_STREAM)

    assert result.exit_code == 0
    assert json.loads(result.output) == {"low": ["Door"], "high": ["Overvoltage"]}


def test_events_text(runner):
    result = runner.invoke(cli, ["events"], input=GOOD_STREAM)

    assert result.exit_code == 0
    assert "HIGH Overvoltage" in result.output
    assert "LOW  Door" in result.output
