"""Tests for the command line interface."""

import logging

import pytest

from zoograph import cli


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Fixture restoring the root logger after the CLI reconfigures it."""
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def run(tmp_path):
    """Fixture running the CLI against a temporary database."""
    db_path = str(tmp_path / "data" / "zoo.db")

    def invoke(*argv: str) -> int:
        return cli.main(["--db", db_path, *argv])

    return invoke


@pytest.fixture
def populated(run, capsys):
    """Fixture providing a CLI over a zoo with two connected aviaries and a lion."""
    assert run("add-aviary", "Savanna", "Open", "1200", "2") == 0
    assert run("add-aviary", "Jungle", "Forest", "800", "3") == 0
    assert run("add-aviary", "Pond", "Water", "300", "5") == 0
    assert run("add-path", "Savanna", "Jungle", "40") == 0
    assert run("add-animal", "Leo", "Lion", "5", "190", "Mammal") == 0
    assert run("add-animal", "Tig", "Tiger", "4", "160", "Mammal") == 0
    capsys.readouterr()
    return run


def test_no_command_prints_help(capsys):
    """Test that running without a command shows usage."""
    assert cli.main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_database_is_created(run, tmp_path):
    """Test that the database and its directory are created on first use."""
    assert run("aviaries") == 0
    assert (tmp_path / "data" / "zoo.db").exists()


def test_listing(populated, capsys):
    """Test the aviary and animal listings."""
    assert populated("aviaries") == 0
    out = capsys.readouterr().out
    assert "Savanna" in out
    assert "Savanna <-> Jungle (40.0 m)" in out or "Jungle <-> Savanna (40.0 m)" in out

    assert populated("animals") == 0
    out = capsys.readouterr().out
    assert "Leo" in out
    assert "unplaced" in out


def test_admit_and_refusal(populated, capsys):
    """Test admission through the CLI, including a refused predator."""
    assert populated("admit", "Savanna", "Leo") == 0
    assert "Leo now lives in Savanna" in capsys.readouterr().out

    assert populated("admit", "Savanna", "Tig") == 1
    assert "incompatible" in capsys.readouterr().out.lower()


def test_move_and_evict(populated, capsys):
    """Test moving and evicting an animal."""
    populated("admit", "Savanna", "Leo")

    assert populated("move", "Savanna", "Jungle", "Leo") == 0
    assert populated("evict", "Savanna", "Leo") == 1
    assert populated("evict", "Jungle", "Leo") == 0
    out = capsys.readouterr().out
    assert "moved from Savanna to Jungle" in out
    assert "Leo left Jungle" in out


def test_unknown_references(populated, capsys):
    """Test that unknown aviaries and animals fail with status 1."""
    assert populated("admit", "Nowhere", "Leo") == 1
    assert "Nowhere" in capsys.readouterr().err

    assert populated("admit", "Savanna", "Nobody") == 1
    assert "Nobody" in capsys.readouterr().out


def test_invalid_input(populated, capsys):
    """Test that invalid values are rejected."""
    assert populated("add-aviary", "Tiny", "Open", "-5", "1") == 1
    assert populated("add-path", "Savanna", "Pond", "0") == 1
    assert populated("add-animal", "Puff", "Dragon", "100", "900", "Dragon") == 1
    assert "Invalid aviary" in capsys.readouterr().out


def test_route(populated, capsys):
    """Test route output and unreachable destinations."""
    assert populated("route", "Savanna", "Jungle") == 0
    out = capsys.readouterr().out
    assert "Route: Savanna -> Jungle" in out
    assert "Total distance: 40.0 m" in out

    assert populated("route", "Savanna", "Pond", "--hops") == 1
    assert "No route" in capsys.readouterr().out


def test_connected(populated, capsys):
    """Test the connectivity report."""
    assert populated("connected") == 1
    assert "unreachable" in capsys.readouterr().out

    populated("add-path", "Jungle", "Pond", "10")
    assert populated("connected") == 0


def test_unusable_database(tmp_path, capsys):
    """Test that a corrupt database file exits with status 2."""
    db_path = tmp_path / "zoo.db"
    db_path.write_bytes(b"definitely not sqlite" * 100)

    assert cli.main(["--db", str(db_path), "aviaries"]) == 2
    assert "Error:" in capsys.readouterr().err


def test_invalid_log_level(run, capsys):
    """Test that an unknown log level exits with status 2."""
    assert run("--log-level", "LOUD", "aviaries") == 2


def test_database_from_environment(tmp_path, monkeypatch):
    """Test that the database path can come from the environment."""
    db_path = tmp_path / "env.db"
    monkeypatch.setenv(cli.DB_ENV_VAR, str(db_path))

    assert cli.default_db_path() == str(db_path)
    assert cli.main(["aviaries"]) == 0
    assert db_path.exists()


def test_default_database_in_user_data_dir(tmp_path, monkeypatch):
    """Test that without an override the database lives in the user data directory."""
    monkeypatch.delenv(cli.DB_ENV_VAR, raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    assert cli.get_data_dir() == str(tmp_path / "zoograph")
    assert cli.default_db_path() == str(tmp_path / "zoograph" / "zoo.db")
    assert cli.main(["aviaries"]) == 0
    assert (tmp_path / "zoograph" / "zoo.db").exists()
