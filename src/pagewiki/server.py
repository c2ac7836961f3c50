"""Static file server for previewing exported pages in a browser."""

import logging
import subprocess
import sys
import time
from pathlib import Path

from .errors import ExternalToolFailure

logger = logging.getLogger(__name__)

# Time to wait for the child to fail fast (e.g. port already in use)
STARTUP_GRACE_SECONDS = 0.3


class StaticServer:
    """Runs `python -m http.server` over the wiki root in the background."""

    def __init__(self) -> None:
        self._process: subprocess.Popen | None = None
        self._host: str = ""
        self._port: int = 0

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    @property
    def url(self) -> str | None:
        """Base URL of the running server, or None if stopped."""
        if not self.is_running:
            return None
        host = "localhost" if self._host in ("", "0.0.0.0") else self._host
        return f"http://{host}:{self._port}/"

    def start(self, directory: Path, host: str, port: int) -> str:
        """Start serving a directory.

        Returns:
            The base URL of the server
        """
        if self.is_running:
            return self.url

        command = [
            sys.executable,
            "-m",
            "http.server",
            str(port),
            "--bind",
            host,
            "--directory",
            str(directory),
        ]
        try:
            process = subprocess.Popen(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise ExternalToolFailure("http.server", None, str(e)) from e

        time.sleep(STARTUP_GRACE_SECONDS)
        returncode = process.poll()
        if returncode is not None:
            _, stderr = process.communicate()
            detail = stderr.strip().splitlines()[-1] if stderr and stderr.strip() else ""
            raise ExternalToolFailure("http.server", returncode, detail)

        self._process = process
        self._host = host
        self._port = port
        logger.info("Static server started on %s:%d for %s", host, port, directory)
        return self.url

    def stop(self) -> None:
        """Stop the server if it is running."""
        if self._process is None:
            return
        if self._process.poll() is None:
            self._process.terminate()
            try:
                self._process.wait(timeout=2.0)
            except subprocess.TimeoutExpired:
                self._process.kill()
        self._process = None
        logger.info("Static server stopped")

    def toggle(self, directory: Path, host: str, port: int) -> bool:
        """Start the server if stopped, stop it if running.

        Returns:
            True if the server is running afterwards
        """
        if self.is_running:
            self.stop()
            return False
        self.start(directory, host, port)
        return True
