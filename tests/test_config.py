"""Tests for pagewiki.config module."""

from pathlib import Path

import pytest

from pagewiki.config import (
    DEFAULT_HEADER_TEMPLATE,
    BackupConfig,
    Config,
    ExportConfig,
    ServerConfig,
    get_default_data_dir,
)


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point config loading at a temporary directory."""
    config_dir = tmp_path / ".config" / "pagewiki"
    data_dir = tmp_path / ".local" / "share" / "pagewiki"
    monkeypatch.setattr("pagewiki.config.get_config_dir", lambda: config_dir)
    monkeypatch.setattr("pagewiki.config.get_config_path", lambda: config_dir / "config.toml")
    monkeypatch.setattr("pagewiki.config.get_default_data_dir", lambda: data_dir)
    return config_dir


class TestConfigDefaults:
    def test_default_roots(self):
        config = Config()
        assert config.roots == [Path.home() / "wiki"]
        assert config.root is None

    def test_default_page_options(self):
        config = Config()
        assert config.extension == "md"
        assert config.read_only is True
        assert config.close_on_switch is True
        assert config.header_template == DEFAULT_HEADER_TEMPLATE

    def test_default_data_directory(self):
        config = Config()
        assert config.data_directory == get_default_data_dir()

    def test_get_log_path(self):
        config = Config()
        assert config.get_log_path() == config.data_directory / "pagewiki.log"

    def test_default_server(self):
        server = ServerConfig()
        assert server.host == "0.0.0.0"
        assert server.port == 8000

    def test_default_backup(self):
        assert BackupConfig().archiver == "tar"

    def test_default_export_extensions(self):
        assert "tables" in ExportConfig().extensions


class TestConfigSaveLoad:
    def test_save_creates_file(self, tmp_path, config_dir):
        config = Config(roots=[tmp_path / "wiki"], data_directory=tmp_path / "data")
        config.save()
        assert (config_dir / "config.toml").exists()

    def test_round_trip(self, tmp_path, config_dir):
        original = Config(
            roots=[tmp_path / "wiki", tmp_path / "work"],
            root=tmp_path / "work",
            extension="org",
            read_only=False,
            close_on_switch=False,
            header_template='#+TITLE: %n\n#+DATE: %d\n"quoted"\n',
            editor="nano",
            data_directory=tmp_path / "data",
            export=ExportConfig(extensions=["tables"]),
            backup=BackupConfig(directory=tmp_path / "backups", archiver="gtar"),
            server=ServerConfig(host="127.0.0.1", port=9090),
        )
        original.save()

        loaded = Config.load()
        assert loaded.roots == original.roots
        assert loaded.root == original.root
        assert loaded.extension == "org"
        assert loaded.read_only is False
        assert loaded.close_on_switch is False
        assert loaded.header_template == original.header_template
        assert loaded.editor == "nano"
        assert loaded.export.extensions == ["tables"]
        assert loaded.backup.directory == original.backup.directory
        assert loaded.backup.archiver == "gtar"
        assert loaded.server.host == "127.0.0.1"
        assert loaded.server.port == 9090

    def test_non_bmp_characters_round_trip(self, tmp_path, config_dir):
        template = "# %n \U0001F4DD\n"
        root = tmp_path / "wiki \U0001F4DA"
        Config(
            roots=[root], header_template=template, data_directory=tmp_path / "data"
        ).save()

        loaded = Config.load()
        assert loaded.header_template == template
        assert loaded.roots == [root]

    def test_unset_active_root_round_trips(self, tmp_path, config_dir):
        Config(roots=[tmp_path / "wiki"], data_directory=tmp_path / "data").save()
        assert Config.load().root is None

    def test_load_creates_defaults_when_missing(self, config_dir):
        config = Config.load()
        assert (config_dir / "config.toml").exists()
        assert config.extension == "md"

    def test_load_partial_config(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text(
            'roots = ["/tmp/notes"]\nextension = ".org"\n\n[server]\nport = 8080\n'
        )

        config = Config.load()
        assert config.roots == [Path("/tmp/notes")]
        assert config.extension == "org"
        assert config.server.port == 8080
        # Defaults for missing fields
        assert config.server.host == "0.0.0.0"
        assert config.read_only is True
        assert config.backup.archiver == "tar"

    def test_load_expands_home(self, config_dir):
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text('roots = ["~/wiki"]\n')
        assert Config.load().roots == [Path.home() / "wiki"]
