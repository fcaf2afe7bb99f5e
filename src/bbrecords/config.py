from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str = "127.0.0.1"
    port: int = 8000
    forwarded_allow_ips: str = "127.0.0.1"  # Proxies trusted for X-Forwarded-For
    debug: bool = False
    production: bool = False  # Enables the Secure flag on the session cookie
    session_secret: str | None = None  # Signs session credentials, required for login
    app_password: str | None = None  # Shared staff password, required for login
    cron_secret: str | None = None  # Bearer secret for the heartbeat endpoint (optional)
    cors_origins: list[str] = []
    # Failed login attempts allowed per client within the window, 0 disables throttling
    login_max_attempts: int = 0
    login_window_seconds: int = 300

    model_config = {
        "env_file": [".env"],
        "env_prefix": "BB_",
        "extra": "ignore",
    }
