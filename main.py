#!/usr/bin/env python3
"""
Run the Tee Time Finder API under uvicorn.

Host, port, reload and log level come from app.config (and so from .env).
"""

import uvicorn

from app.config import API_HOST, API_PORT, API_RELOAD, LOG_LEVEL


def main() -> None:
    uvicorn.run(
        "app.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_RELOAD,
        log_level=LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
