import uvicorn

from services.linkding_relay.app import create_app
from services.linkding_relay.config import RelaySettings
from services.shared.logging import configure_logging


def main() -> None:
    settings = RelaySettings.from_env()
    configure_logging(settings.service_name, settings.log_level)
    # uvicorn stops on SIGTERM/SIGINT; nothing in flight needs to be drained.
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
        timeout_graceful_shutdown=1,
    )


if __name__ == "__main__":
    main()
