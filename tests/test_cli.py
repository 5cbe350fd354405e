"""Tests for the command-line interface."""
import json
import pytest
from click.testing import CliRunner

from dota_combatlog.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def run(runner, db_path):
    """Invoke the CLI against the temporary database with quiet logging."""
    def _run(*args):
        return runner.invoke(main, ["--db", db_path, *args], env={"DOTA_LOG_LEVEL": "WARNING"})
    return _run


@pytest.fixture
def match_id(run, sample_log_file):
    result = run("ingest", sample_log_file)
    assert result.exit_code == 0, result.output
    return result.output.strip()


def test_ingest_prints_match_id(match_id):
    assert len(match_id) == 32


def test_kills(run, match_id):
    result = run("kills", match_id)

    assert result.exit_code == 0
    assert json.loads(result.output) == [
        {"hero": "snapfire", "kills": 2},
        {"hero": "bane", "kills": 1},
    ]


def test_items(run, match_id):
    result = run("items", match_id, "snapfire")

    assert result.exit_code == 0
    assert json.loads(result.output) == [
        {"item": "clarity", "timestamp": 526693},
        {"item": "clarity", "timestamp": 750500},
    ]


def test_spells(run, match_id):
    result = run("spells", match_id, "snapfire")

    assert result.exit_code == 0
    assert json.loads(result.output) == [
        {"spell": "snapfire_scatterblast", "casts": 2},
        {"spell": "snapfire_firesnap_cookie", "casts": 1},
    ]


def test_damage(run, match_id):
    result = run("damage", match_id, "mars")

    assert result.exit_code == 0
    assert json.loads(result.output) == [
        {"target": "snapfire", "damageInstances": 2, "totalDamage": 200},
        {"target": "bane", "damageInstances": 1, "totalDamage": 40},
    ]


def test_unknown_match(run, match_id):
    result = run("kills", "unknown")

    assert result.exit_code == 1
    assert "Match not found with id unknown" in result.output


def test_blank_log_file(run, tmp_path):
    blank = tmp_path / "blank.log.txt"
    blank.write_text("   \n", encoding="utf-8")

    result = run("ingest", str(blank))

    assert result.exit_code == 1
    assert "must not be blank" in result.output


def test_info(run, match_id):
    result = run("info")

    assert result.exit_code == 0
    assert "Found 1 matches in database" in result.output
    assert match_id in result.output
    assert "13 events" in result.output


def test_info_empty_database(run):
    result = run("info")

    assert result.exit_code == 0
    assert "No matches found in database" in result.output
