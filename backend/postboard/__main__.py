"""Run the API with uvicorn: ``python -m postboard`` or the ``postboard`` script."""

import uvicorn

from postboard.config import settings


def main() -> None:
    uvicorn.run(
        "postboard.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
