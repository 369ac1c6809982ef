"""Run the URL shortener with uvicorn: ``python -m shortener``."""

import uvicorn

from shortener.core.config import settings


def main() -> None:
    uvicorn.run(
        "shortener.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,  # loguru owns logging
    )


if __name__ == "__main__":
    main()
