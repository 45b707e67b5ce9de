"""Web UI for PeriodHub."""

import uvicorn


def run(host: str = "127.0.0.1", port: int = 8000, reload: bool = False):
    """Run the web server."""
    uvicorn.run(
        "periodhub.web.app:app",
        host=host,
        port=port,
        reload=reload,
    )


__all__ = ["run"]
