"""Tests for pagewiki.server module."""

import pytest

from pagewiki.errors import ExternalToolFailure
from pagewiki.server import StaticServer


class FakeProcess:
    """Popen stand-in that stays alive until terminated."""

    def __init__(self, command, exit_code=None, stderr=""):
        self.command = command
        self.returncode = exit_code
        self._stderr = stderr
        self.terminated = False

    def poll(self):
        return self.returncode

    def communicate(self):
        return "", self._stderr

    def terminate(self):
        self.terminated = True
        self.returncode = -15

    def wait(self, timeout=None):
        return self.returncode

    def kill(self):
        self.returncode = -9


@pytest.fixture
def popen(monkeypatch):
    """Patch subprocess.Popen in the server module and record processes."""
    processes = []
    behaviour = {"exit_code": None, "stderr": ""}

    def fake_popen(command, **kwargs):
        process = FakeProcess(command, behaviour["exit_code"], behaviour["stderr"])
        processes.append(process)
        return process

    monkeypatch.setattr("pagewiki.server.subprocess.Popen", fake_popen)
    monkeypatch.setattr("pagewiki.server.STARTUP_GRACE_SECONDS", 0)
    fake_popen.processes = processes
    fake_popen.behaviour = behaviour
    return fake_popen


class TestStaticServer:
    def test_start(self, popen, wiki_root):
        server = StaticServer()
        url = server.start(wiki_root, "0.0.0.0", 8000)

        assert url == "http://localhost:8000/"
        assert server.is_running
        command = popen.processes[0].command
        assert command[1:4] == ["-m", "http.server", "8000"]
        assert command[-4:] == ["--bind", "0.0.0.0", "--directory", str(wiki_root)]

    def test_url_uses_bind_host(self, popen, wiki_root):
        server = StaticServer()
        assert server.start(wiki_root, "127.0.0.1", 9000) == "http://127.0.0.1:9000/"

    def test_start_twice_reuses_process(self, popen, wiki_root):
        server = StaticServer()
        server.start(wiki_root, "0.0.0.0", 8000)
        server.start(wiki_root, "0.0.0.0", 8000)
        assert len(popen.processes) == 1

    def test_stop(self, popen, wiki_root):
        server = StaticServer()
        server.start(wiki_root, "0.0.0.0", 8000)
        server.stop()
        assert popen.processes[0].terminated
        assert not server.is_running
        assert server.url is None

    def test_stop_when_not_running(self):
        StaticServer().stop()

    def test_immediate_exit_raises(self, popen, wiki_root):
        popen.behaviour["exit_code"] = 1
        popen.behaviour["stderr"] = "Traceback\nOSError: [Errno 98] Address already in use\n"
        server = StaticServer()

        with pytest.raises(ExternalToolFailure) as excinfo:
            server.start(wiki_root, "0.0.0.0", 8000)

        assert "Address already in use" in str(excinfo.value)
        assert not server.is_running

    def test_toggle(self, popen, wiki_root):
        server = StaticServer()
        assert server.toggle(wiki_root, "0.0.0.0", 8000) is True
        assert server.toggle(wiki_root, "0.0.0.0", 8000) is False
        assert not server.is_running

    def test_spawn_failure(self, monkeypatch, wiki_root):
        def broken_popen(command, **kwargs):
            raise OSError("no python")

        monkeypatch.setattr("pagewiki.server.subprocess.Popen", broken_popen)
        with pytest.raises(ExternalToolFailure):
            StaticServer().start(wiki_root, "0.0.0.0", 8000)
