"""Application entry point for the badgecount server."""

from badgecount.app import App
from badgecount.config import Config
from badgecount.core.store import MongoBadgeStore
from badgecount.logging import setup_logging
from badgecount.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    store = MongoBadgeStore.from_config(config)
    app = App(config, store)
    run_server(app, config)


if __name__ == "__main__":
    main()
