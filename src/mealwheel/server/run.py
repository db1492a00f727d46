"""Console entry point for serving the Mealwheel API with uvicorn."""

from __future__ import annotations

import os

import uvicorn


def _port(value: str | None) -> int:
    try:
        return int(value or "8000")
    except ValueError as exc:
        raise SystemExit(f"Invalid MEALWHEEL_SERVER_PORT '{value}': {exc}") from exc


def main() -> None:
    """Entry point for the ``mealwheel-server`` script."""

    uvicorn.run(
        "mealwheel.server.app:app",
        host=os.environ.get("MEALWHEEL_SERVER_HOST", "127.0.0.1"),
        port=_port(os.environ.get("MEALWHEEL_SERVER_PORT")),
        reload=os.environ.get("RELOAD") == "1",
    )


if __name__ == "__main__":
    main()
