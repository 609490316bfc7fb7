"""Run the sync server: ``python -m kosync``."""
import uvicorn

from kosync.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "kosync.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,  # create_app configures logging
    )


if __name__ == "__main__":
    main()
