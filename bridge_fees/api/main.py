"""FastAPI application for the bridge fee calculator.

Exposes the fee arithmetic and the price oracle over HTTP. Session state
(price resolution, fee selection) stays in-process in ``FeeSelector``.
"""

import os

import uvicorn
from fastapi import FastAPI

from bridge_fees import __version__
from bridge_fees.api.endpoints import router

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("BRIDGE_FEES_HOST", "0.0.0.0")
PORT = int(os.environ.get("BRIDGE_FEES_PORT", "8000"))
DEBUG = os.environ.get("BRIDGE_FEES_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="Bridge Fee Calculator",
    description="Bridge fee arithmetic and token price lookup",
    version=__version__,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the calculator API server.

    Configuration via environment variables:
    - BRIDGE_FEES_HOST: Host to bind to (default: 0.0.0.0)
    - BRIDGE_FEES_PORT: Port to bind to (default: 8000)
    - BRIDGE_FEES_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "bridge_fees.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
