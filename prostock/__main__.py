"""Run the API server: python -m prostock."""

import uvicorn

from prostock.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "prostock.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )


if __name__ == "__main__":
    main()
