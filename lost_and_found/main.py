"""Main script for running the lost and found backend."""

import uvicorn

from .infrastructure.dependencies import get_service_container


def main():
    """Run the API server."""
    config = get_service_container().config

    print("Lost & Found - campus lost item matching and claims")
    print("---------------------------------------------------")
    print(f"Serving on http://{config.host}:{config.port} (storage: {config.storage_backend})")

    uvicorn.run(
        "lost_and_found.api.app:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
