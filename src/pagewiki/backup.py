"""Compressed backups of a wiki root."""

import logging
import shutil
import subprocess
import tempfile
from datetime import date
from pathlib import Path

from .errors import ExternalToolFailure

logger = logging.getLogger(__name__)


def backup_name(root: Path, today: date) -> str:
    """Get the archive file name for a backup taken on a given day."""
    return f"{root.name}-backup-{today.strftime('%Y-%m-%d')}.tar.gz"


def make_backup(
    root: Path,
    destination: Path,
    archiver: str = "tar",
    today: date | None = None,
) -> Path:
    """Archive the wiki root and move the archive into the backup directory.

    Args:
        root: Wiki root to archive
        destination: Directory receiving the archive
        archiver: tar-compatible executable
        today: Date used in the archive name (defaults to today)

    Returns:
        Path to the archive in the destination directory
    """
    today = today or date.today()
    name = backup_name(root, today)

    with tempfile.TemporaryDirectory(prefix="pagewiki-") as tmp:
        archive = Path(tmp) / name
        command = [archiver, "-czf", str(archive), "-C", str(root.parent), root.name]
        logger.info("Running backup: %s", " ".join(command))
        try:
            result = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise ExternalToolFailure(archiver, None, str(e)) from e

        if result.returncode != 0:
            raise ExternalToolFailure(archiver, result.returncode, result.stderr.strip())

        destination.mkdir(parents=True, exist_ok=True)
        target = destination / name
        shutil.move(str(archive), target)

    logger.info("Backup written: %s", target)
    return target
