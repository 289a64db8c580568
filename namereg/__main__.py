"""
Run the service with uvicorn.

    python -m namereg

Uvicorn handles SIGTERM/SIGINT: it stops accepting connections, lets
in-flight requests finish, runs the lifespan shutdown and exits 0.
"""

import uvicorn

from namereg.config import settings_from_env


def main() -> None:
    settings = settings_from_env()
    uvicorn.run(
        "namereg.transport.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
