"""Tests for the uvicorn runner."""

from uvicorn.config import LOGGING_CONFIG

from bbrecords.app import App
from bbrecords.web import runner


class TestBuildLogConfig:
    """Tests for build_log_config."""

    def test_formats_are_overridden(self):
        log_config = runner.build_log_config()
        assert log_config["formatters"]["default"]["fmt"] == "%(asctime)s - %(levelname)s - %(message)s"
        assert "%(request_line)s" in log_config["formatters"]["access"]["fmt"]

    def test_uvicorn_defaults_are_not_modified(self):
        """Test that building the config leaves uvicorn's module-level dict alone."""
        before = LOGGING_CONFIG["formatters"]["default"]["fmt"]
        runner.build_log_config()
        assert LOGGING_CONFIG["formatters"]["default"]["fmt"] == before


class TestRunServer:
    """Tests for run_server."""

    def test_trusts_forwarded_headers_only_from_configured_proxies(self, config, monkeypatch):
        calls = []
        monkeypatch.setattr(runner.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
        config = config.model_copy(update={"host": "0.0.0.0", "port": 9000, "forwarded_allow_ips": "10.0.0.5"})

        runner.run_server(App(config), config)

        assert len(calls) == 1
        kwargs = calls[0]
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 9000
        assert kwargs["proxy_headers"] is True
        assert kwargs["forwarded_allow_ips"] == "10.0.0.5"
        assert kwargs["access_log"] is True

    def test_default_trusts_only_localhost(self, config):
        assert config.forwarded_allow_ips == "127.0.0.1"
