"""Application entry point for the BB Records backend server."""

from bbrecords.app import App
from bbrecords.config import Config
from bbrecords.logging import setup_logging
from bbrecords.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
