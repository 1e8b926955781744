"""
Configuration and CLI tests.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from movie_db import cli
from movie_db.config import Config

ENV_VARS = ["MONGODB_URI", "MONGODB_DB", "MONGODB_TIMEOUT_MS", "API_HOST", "PORT", "LOG_DIR"]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear related variables and keep any local .env file out of the way."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("movie_db.config.load_dotenv", lambda *args, **kwargs: None)
    return monkeypatch


class TestConfig:

    def test_requires_mongodb_uri(self, clean_env):
        with pytest.raises(ValueError, match="MONGODB_URI"):
            Config.from_env()

    def test_defaults(self, clean_env):
        clean_env.setenv("MONGODB_URI", "mongodb://localhost:27017")

        config = Config.from_env()

        assert config.mongodb_uri == "mongodb://localhost:27017"
        assert config.db_name == ""
        assert config.collection_name == "movies"
        assert config.server_selection_timeout_ms == 5000
        assert config.api_host == "0.0.0.0"
        assert config.api_port == 3000

    def test_overrides(self, clean_env, tmp_path):
        clean_env.setenv("MONGODB_URI", "mongodb://db:27017")
        clean_env.setenv("MONGODB_DB", "films")
        clean_env.setenv("MONGODB_TIMEOUT_MS", "1500")
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("LOG_DIR", str(tmp_path))

        config = Config.from_env()

        assert config.db_name == "films"
        assert config.server_selection_timeout_ms == 1500
        assert config.api_port == 8080
        assert config.log_dir == Path(tmp_path)


class TestCli:

    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_missing_config(self, clean_env, capsys):
        assert cli.main(["status"]) == 1
        assert "Configuration error" in capsys.readouterr().out

    def test_status(self, clean_env, capsys):
        clean_env.setenv("MONGODB_URI", "mongodb://localhost:27017")
        store = MagicMock()
        store.get_status.return_value = {"movies": 1200, "reviews": 3}

        with patch.object(cli, "MovieStore", return_value=store):
            assert cli.main(["status"]) == 0

        out = capsys.readouterr().out
        assert "1,200" in out
        assert "Reviews" in out

    def test_setup_creates_indexes(self, clean_env):
        clean_env.setenv("MONGODB_URI", "mongodb://localhost:27017")
        store = MagicMock()

        with patch.object(cli, "MovieStore", return_value=store):
            assert cli.main(["setup"]) == 0

        store.connect.assert_called_once()
        store.ensure_indexes.assert_called_once()

    def test_store_failure_returns_error(self, clean_env, capsys):
        clean_env.setenv("MONGODB_URI", "mongodb://localhost:27017")
        store = MagicMock()
        store.get_status.side_effect = RuntimeError("boom")

        with patch.object(cli, "MovieStore", return_value=store):
            assert cli.main(["status"]) == 1
