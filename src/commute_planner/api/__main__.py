"""
commute_planner.api.__main__

Entrypoint for running the FastAPI application via `python -m commute_planner.api`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from commute_planner.api.app import create_app
from commute_planner.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    # A single worker: roster and office state live in process memory.
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
