"""Run the duet API server: ``python -m duet``."""

import uvicorn

from duet.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "duet.api.app:app",
        host=settings.api.host,
        port=settings.api.port,
        log_level=settings.observability.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
