"""
Settings validation, client bootstrap and process exit codes.
"""

import os
import signal
import subprocess
import sys
from pathlib import Path

import httpx
import pytest

from postgsail_mcp import main as entrypoint
from postgsail_mcp.core.config import Settings
from postgsail_mcp.core.errors import ConfigurationError, ErrorKind
from tests.conftest import BASE_URL

ENV_VARS = [
    "POSTGSAIL_URL", "POSTGSAIL_TOKEN", "POSTGSAIL_USER", "POSTGSAIL_PASS",
    "POSTGSAIL_VERBOSE", "POSTGSAIL_DEBUG", "POSTGSAIL_TIMEOUT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def make_settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


class TestSettings:

    def test_defaults(self):
        settings = make_settings()
        assert settings.POSTGSAIL_VERBOSE is False
        assert settings.POSTGSAIL_TIMEOUT == 30.0

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("POSTGSAIL_URL", BASE_URL)
        monkeypatch.setenv("POSTGSAIL_DEBUG", "true")
        settings = make_settings()
        assert settings.POSTGSAIL_URL == BASE_URL
        assert settings.POSTGSAIL_DEBUG is True

    def test_missing_url(self):
        with pytest.raises(ConfigurationError) as exc_info:
            make_settings(POSTGSAIL_TOKEN="t").validate_startup()
        assert "POSTGSAIL_URL" in str(exc_info.value)
        assert exc_info.value.kind is ErrorKind.CONFIGURATION

    def test_missing_credentials(self):
        with pytest.raises(ConfigurationError):
            make_settings(POSTGSAIL_URL=BASE_URL, POSTGSAIL_USER="skipper@example.com").validate_startup()

    @pytest.mark.parametrize("values", [
        {"POSTGSAIL_TOKEN": "t"},
        {"POSTGSAIL_USER": "skipper@example.com", "POSTGSAIL_PASS": "secret"},
    ])
    def test_valid_configurations(self, values):
        make_settings(POSTGSAIL_URL=BASE_URL, **values).validate_startup()


class TestCreateClient:

    @pytest.mark.asyncio
    async def test_token_skips_login(self, backend):
        settings = make_settings(POSTGSAIL_URL=BASE_URL, POSTGSAIL_TOKEN="t")
        client = await entrypoint.create_client(settings, transport=backend.transport)
        assert client.session.token == "t"
        assert client.base_url == f"{BASE_URL}/"
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_login_stores_token(self, backend):
        backend.respond("rpc/login", status_code=200, json={"token": "jwt"})
        settings = make_settings(POSTGSAIL_URL=BASE_URL, POSTGSAIL_USER="skipper@example.com", POSTGSAIL_PASS="secret")
        client = await entrypoint.create_client(settings, transport=backend.transport)
        assert client.session.token == "jwt"
        assert len(backend.requests) == 1
        assert "Authorization" not in backend.last.headers

    @pytest.mark.asyncio
    async def test_login_without_token_is_fatal(self, backend):
        backend.respond("rpc/login", status_code=200, json={})
        settings = make_settings(POSTGSAIL_URL=BASE_URL, POSTGSAIL_USER="skipper@example.com", POSTGSAIL_PASS="secret")
        with pytest.raises(ConfigurationError):
            await entrypoint.create_client(settings, transport=backend.transport)

    @pytest.mark.asyncio
    async def test_rejected_login_is_fatal(self, backend):
        backend.respond("rpc/login", status_code=403, json={"message": "invalid credentials"})
        settings = make_settings(POSTGSAIL_URL=BASE_URL, POSTGSAIL_USER="skipper@example.com", POSTGSAIL_PASS="wrong")
        with pytest.raises(ConfigurationError) as exc_info:
            await entrypoint.create_client(settings, transport=backend.transport)
        assert "403" in str(exc_info.value)


class TestMain:

    def test_configuration_error_exits_with_one(self, monkeypatch):
        monkeypatch.setattr(entrypoint, "get_settings", lambda: make_settings())
        monkeypatch.setattr(entrypoint.signal, "signal", lambda *args: None)
        with pytest.raises(SystemExit) as exc_info:
            entrypoint.main()
        assert exc_info.value.code == 1

    def test_interrupt_exits_with_zero(self, monkeypatch):
        async def interrupted(settings):
            raise KeyboardInterrupt

        monkeypatch.setattr(entrypoint, "get_settings", lambda: make_settings(POSTGSAIL_URL=BASE_URL, POSTGSAIL_TOKEN="t"))
        monkeypatch.setattr(entrypoint.signal, "signal", lambda *args: None)
        monkeypatch.setattr(entrypoint, "run", interrupted)
        with pytest.raises(SystemExit) as exc_info:
            entrypoint.main()
        assert exc_info.value.code == 0

    def test_server_crash_exits_with_one(self, monkeypatch):
        async def crashing(settings):
            raise RuntimeError("stdio closed")

        monkeypatch.setattr(entrypoint, "get_settings", lambda: make_settings(POSTGSAIL_URL=BASE_URL, POSTGSAIL_TOKEN="t"))
        monkeypatch.setattr(entrypoint.signal, "signal", lambda *args: None)
        monkeypatch.setattr(entrypoint, "run", crashing)
        with pytest.raises(SystemExit) as exc_info:
            entrypoint.main()
        assert exc_info.value.code == 1

    @pytest.mark.parametrize("signum", [signal.SIGTERM, signal.SIGINT])
    def test_shutdown_handler_exits_immediately_with_zero(self, monkeypatch, signum):
        def fake_exit(code):
            raise SystemExit(code)

        monkeypatch.setattr(entrypoint.os, "_exit", fake_exit)
        with pytest.raises(SystemExit) as exc_info:
            entrypoint._handle_shutdown(signum, None)
        assert exc_info.value.code == 0


PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals required")
class TestSignalShutdown:
    """Runs the real entrypoint with stdin held open, as an agent host does."""

    @pytest.mark.parametrize("signum", [signal.SIGTERM, signal.SIGINT])
    def test_signal_exits_with_zero_while_stdin_is_open(self, signum):
        env = dict(os.environ)
        env.update({
            "POSTGSAIL_URL": BASE_URL,
            "POSTGSAIL_TOKEN": "t",
            "COLUMNS": "200",
            "PYTHONUNBUFFERED": "1",
        })
        process = subprocess.Popen(
            [sys.executable, "-m", "postgsail_mcp.main"],
            cwd=PROJECT_ROOT,
            env=env,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
        try:
            for line in process.stderr:
                if "initialization successful" in line:
                    break
            assert process.poll() is None

            process.send_signal(signum)
            assert process.wait(timeout=10) == 0
        finally:
            if process.poll() is None:
                process.kill()
                process.wait()
            process.stdin.close()
            process.stdout.close()
            process.stderr.close()
