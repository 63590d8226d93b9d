"""
Run the API with uvicorn on the configured host and port.

    python -m formbuilder
    formbuilder-server          (console script, same thing)
"""

import uvicorn

from formbuilder.config import settings


def main() -> None:
    uvicorn.run(
        "formbuilder.main:app",
        host=settings.backend_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
