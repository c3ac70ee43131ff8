"""
NoteStore - Application, Settings and CLI Tests
=================================================

What:  Tests for the pieces around the note routes: Settings validation,
       command-line parsing, request-ID middleware, startup lifecycle.
"""

import logging

import pytest
from pydantic import ValidationError as SettingsValidationError

from notestore.cli import build_parser, parse_settings
from notestore.config import Settings
from notestore.main import create_app


class TestSettings:

    def test_required_fields(self, tmp_path):
        settings = Settings(host="localhost", port=8080, cache=str(tmp_path))
        assert settings.host == "localhost"
        assert settings.port == 8080
        assert settings.cache_path == tmp_path.resolve()
        assert settings.log_level == "INFO"
        assert settings.base_url == "http://localhost:8080"

    def test_log_level_is_normalized(self, tmp_path):
        settings = Settings(host="localhost", port=8080, cache=str(tmp_path), log_level="debug")
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level_rejected(self, tmp_path):
        with pytest.raises(SettingsValidationError, match="Invalid log_level"):
            Settings(host="localhost", port=8080, cache=str(tmp_path), log_level="LOUD")

    @pytest.mark.parametrize("port", [0, 65536, -1])
    def test_port_out_of_range_rejected(self, tmp_path, port):
        with pytest.raises(SettingsValidationError):
            Settings(host="localhost", port=port, cache=str(tmp_path))

    def test_settings_are_immutable(self, tmp_path):
        settings = Settings(host="localhost", port=8080, cache=str(tmp_path))
        with pytest.raises(SettingsValidationError):
            settings.port = 9090

    def test_reads_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("NOTES_HOST", "0.0.0.0")
        monkeypatch.setenv("NOTES_PORT", "5000")
        monkeypatch.setenv("NOTES_CACHE", str(tmp_path))

        settings = Settings()

        assert settings.host == "0.0.0.0"
        assert settings.port == 5000
        assert settings.cache_path == tmp_path.resolve()

    def test_missing_required_values_rejected(self, monkeypatch):
        for name in ("NOTES_HOST", "NOTES_PORT", "NOTES_CACHE"):
            monkeypatch.delenv(name, raising=False)
        with pytest.raises(SettingsValidationError):
            Settings()


class TestCommandLine:

    def test_short_options(self, tmp_path):
        settings = parse_settings(["-h", "127.0.0.1", "-p", "3000", "-c", str(tmp_path)])
        assert settings.host == "127.0.0.1"
        assert settings.port == 3000
        assert settings.cache == str(tmp_path)

    def test_long_options_and_log_level(self, tmp_path):
        settings = parse_settings(
            ["--host", "0.0.0.0", "--port", "8080", "--cache", str(tmp_path), "--log-level", "warning"]
        )
        assert settings.port == 8080
        assert settings.log_level == "WARNING"

    @pytest.mark.parametrize(
        "argv",
        [
            ["-p", "3000", "-c", "cache"],
            ["-h", "127.0.0.1", "-c", "cache"],
            ["-h", "127.0.0.1", "-p", "3000"],
        ],
    )
    def test_missing_required_option_exits(self, argv):
        with pytest.raises(SystemExit) as exc_info:
            parse_settings(argv)
        assert exc_info.value.code == 2

    def test_non_numeric_port_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_settings(["-h", "127.0.0.1", "-p", "http", "-c", "cache"])
        assert exc_info.value.code == 2

    def test_out_of_range_port_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_settings(["-h", "127.0.0.1", "-p", "70000", "-c", "cache"])
        assert exc_info.value.code == 2
        assert "port" in capsys.readouterr().err

    def test_help_flag_is_long_form(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--help"])
        assert exc_info.value.code == 0
        assert "--cache" in capsys.readouterr().out


class TestRequestID:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_value_is_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_present_on_error_responses(self, test_client):
        response = await test_client.get("/notes/missing", headers={"X-Request-ID": "trace-404"})
        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "trace-404"


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_logs_one_line_per_request(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="notestore.access"):
            await test_client.get("/notes/missing", headers={"X-Request-ID": "abc"})

        records = [r for r in caplog.records if r.name == "notestore.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert records[0].status == 404
        assert records[0].path == "/notes/missing"
        assert records[0].request_id == "abc"

    @pytest.mark.asyncio
    async def test_debug_line_names_the_note(self, test_client, caplog):
        with caplog.at_level(logging.DEBUG, logger="notestore.access"):
            await test_client.get("/notes/todo")
            await test_client.get("/notes")

        debug = [
            r for r in caplog.records
            if r.name == "notestore.access" and r.levelno == logging.DEBUG
        ]
        assert len(debug) == 1
        assert "'todo'" in debug[0].getMessage()


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_creates_cache_directory(self, tmp_path):
        cache = tmp_path / "nested" / "cache"
        app = create_app(Settings(host="127.0.0.1", port=3000, cache=str(cache), log_level="INFO"))

        async with app.router.lifespan_context(app):
            assert cache.is_dir()

    @pytest.mark.asyncio
    async def test_startup_logs_address_and_cache_directory(self, tmp_path, capsys):
        cache = tmp_path / "cache"
        app = create_app(Settings(host="127.0.0.1", port=3000, cache=str(cache), log_level="INFO"))

        async with app.router.lifespan_context(app):
            pass

        out = capsys.readouterr().out
        assert "Server is running at http://127.0.0.1:3000" in out
        assert f"Cache directory: {cache.resolve()}" in out
