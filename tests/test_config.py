"""Tests for libro.config."""

from pathlib import Path

import pytest

from libro.config import Config, get_libro_dir
from libro.errors import LibroError


@pytest.fixture
def libro_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("LIBRO_DIR", str(tmp_path))
    monkeypatch.delenv("LIBRO_DB_PATH", raising=False)
    return tmp_path


def test_defaults_without_file(libro_dir):
    config = Config.load()
    assert config.db_path == Path("libro.db")
    assert config.tick_interval == 0.1
    assert config.message_ttl == 3.0
    assert config.log_path == libro_dir / "tui.log"


def test_values_from_yaml(libro_dir):
    (libro_dir / "config.yml").write_text(
        "db_path: /data/books.db\ntick_interval: 0.25\nmessage_ttl: 5\n"
    )
    config = Config.load()
    assert config.db_path == Path("/data/books.db")
    assert config.tick_interval == 0.25
    assert config.message_ttl == 5.0


def test_env_overrides_db_path(libro_dir, monkeypatch):
    (libro_dir / "config.yml").write_text("db_path: /data/books.db\n")
    monkeypatch.setenv("LIBRO_DB_PATH", "/tmp/other.db")
    assert Config.load().db_path == Path("/tmp/other.db")


def test_invalid_yaml_raises(libro_dir):
    (libro_dir / "config.yml").write_text("db_path: [unclosed\n")
    with pytest.raises(LibroError):
        Config.load()


def test_non_mapping_raises(libro_dir):
    (libro_dir / "config.yml").write_text("- just\n- a list\n")
    with pytest.raises(LibroError):
        Config.load()


def test_libro_dir_defaults_to_home(monkeypatch):
    monkeypatch.delenv("LIBRO_DIR", raising=False)
    assert get_libro_dir() == Path.home() / ".libro"
