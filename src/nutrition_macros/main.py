"""Local development server."""

import uvicorn

from nutrition_macros.config import Settings


def main() -> None:
    """Serve the API with uvicorn."""
    settings = Settings()
    uvicorn.run(
        "nutrition_macros.api.asgi:app",
        host=settings.host,
        port=settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
