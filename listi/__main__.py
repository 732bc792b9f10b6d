"""Run the API server with uvicorn: ``python -m listi``."""

import uvicorn

from listi.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "listi.api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
