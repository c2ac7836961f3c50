"""Configuration loading and defaults for pagewiki."""

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_HEADER_TEMPLATE = "# %n\n\n*Created: %d*\n\n"


def get_config_dir() -> Path:
    """Get the pagewiki config directory (XDG-style)."""
    return Path.home() / ".config" / "pagewiki"


def get_config_path() -> Path:
    """Get the config file path."""
    return get_config_dir() / "config.toml"


def get_default_data_dir() -> Path:
    """Get the default data directory for logs."""
    return Path.home() / ".local" / "share" / "pagewiki"


def _toml_string(value: object) -> str:
    # JSON string escapes are valid TOML basic-string escapes
    return json.dumps(str(value), ensure_ascii=False)


def _toml_list(values: list) -> str:
    return "[" + ", ".join(_toml_string(v) for v in values) + "]"


def _optional_path(value: str | None) -> Path | None:
    if not value:
        return None
    return Path(value).expanduser()


@dataclass
class ExportConfig:
    """HTML export configuration."""

    extensions: list[str] = field(
        default_factory=lambda: ["fenced_code", "tables", "toc"]
    )


@dataclass
class BackupConfig:
    """Backup archive configuration."""

    directory: Path = field(default_factory=lambda: Path.home() / "wiki-backups")
    archiver: str = "tar"


@dataclass
class ServerConfig:
    """Static preview server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class Config:
    """Application configuration."""

    roots: list[Path] = field(default_factory=lambda: [Path.home() / "wiki"])
    root: Path | None = None  # active root; None = first of roots
    extension: str = "md"
    read_only: bool = True
    close_on_switch: bool = True
    header_template: str = DEFAULT_HEADER_TEMPLATE
    editor: str = "vim"
    data_directory: Path = field(default_factory=lambda: get_default_data_dir())
    export: ExportConfig = field(default_factory=ExportConfig)
    backup: BackupConfig = field(default_factory=BackupConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    def get_log_path(self) -> Path:
        """Get the log file path based on configured data directory."""
        return self.data_directory / "pagewiki.log"

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file or create defaults."""
        config_path = get_config_path()

        # Ensure config directory exists
        config_dir = get_config_dir()
        config_dir.mkdir(parents=True, exist_ok=True)

        if not config_path.exists():
            # Create default config file
            default_config = cls()
            default_config.data_directory.mkdir(parents=True, exist_ok=True)
            default_config.save()
            return default_config

        # Load existing config
        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        defaults = cls()

        # Parse wiki roots
        if "roots" in data:
            roots = [Path(r).expanduser() for r in data["roots"]]
        else:
            roots = defaults.roots
        root = _optional_path(data.get("root"))

        # Parse data_directory (where the log is written)
        data_dir = data.get("data_directory", str(get_default_data_dir()))
        data_directory = Path(data_dir).expanduser()

        export_data = data.get("export", {})
        export = ExportConfig(
            extensions=export_data.get("extensions", defaults.export.extensions),
        )

        backup_data = data.get("backup", {})
        backup = BackupConfig(
            directory=Path(
                backup_data.get("directory", str(defaults.backup.directory))
            ).expanduser(),
            archiver=backup_data.get("archiver", defaults.backup.archiver),
        )

        server_data = data.get("server", {})
        server = ServerConfig(
            host=server_data.get("host", defaults.server.host),
            port=int(server_data.get("port", defaults.server.port)),
        )

        config = cls(
            roots=roots,
            root=root,
            extension=data.get("extension", defaults.extension).lstrip("."),
            read_only=data.get("read_only", defaults.read_only),
            close_on_switch=data.get("close_on_switch", defaults.close_on_switch),
            header_template=data.get("header_template", defaults.header_template),
            editor=data.get("editor", defaults.editor),
            data_directory=data_directory,
            export=export,
            backup=backup,
            server=server,
        )

        # Ensure data directory exists
        config.data_directory.mkdir(parents=True, exist_ok=True)

        return config

    def save(self) -> None:
        """Save configuration to file."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        # Build TOML content manually (tomllib is read-only)
        lines = [
            "# pagewiki Configuration",
            "",
            "# Candidate wiki root directories",
            f"roots = {_toml_list(self.roots)}",
            "",
            "# Active wiki root (empty = first of roots)",
            f"root = {_toml_string(self.root or '')}",
            "",
            "# Page file extension",
            f"extension = {_toml_string(self.extension)}",
            "",
            "# Open pages read-only (preview) instead of in the editor",
            f"read_only = {str(self.read_only).lower()}",
            "",
            "# Close open pages when switching roots",
            f"close_on_switch = {str(self.close_on_switch).lower()}",
            "",
            "# Header for new pages: %n = page name, %d = date (YYYY-MM-DD)",
            f"header_template = {_toml_string(self.header_template)}",
            "",
            "# Editor command for editing pages",
            f"editor = {_toml_string(self.editor)}",
            "",
            "# Directory for the log file",
            "# Default: ~/.local/share/pagewiki",
            f"data_directory = {_toml_string(self.data_directory)}",
            "",
            "# Markdown extensions used for HTML export",
            "[export]",
            f"extensions = {_toml_list(self.export.extensions)}",
            "",
            "# Backup archives",
            "[backup]",
            f"directory = {_toml_string(self.backup.directory)}",
            f"archiver = {_toml_string(self.backup.archiver)}",
            "",
            "# Static preview server",
            "[server]",
            f"host = {_toml_string(self.server.host)}",
            f"port = {self.server.port}",
        ]

        config_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
