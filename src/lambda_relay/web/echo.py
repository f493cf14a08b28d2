"""
FastAPI echo target.

A stand-in for the local endpoint during development: every JSON body sent
to it comes back unchanged, so `lambda-relay send` and the handler can be
exercised without the real service.
"""

import json
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create the echo application.

    Routes:
        GET  /health          -> {"status": "ok"}
        POST /{path}          -> request body echoed back
        GET  /{path}          -> request body echoed back ({} when empty)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="lambda-relay echo target",
        docs_url=None,
        redoc_url=None,
    )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.api_route("/{path:path}", methods=["GET", "POST"])
    async def echo(path: str, request: Request):
        raw = await request.body()
        if not raw:
            return JSONResponse(content={})

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Rejected non-JSON body on /{path}: {e}")
            return JSONResponse(status_code=400, content={"error": f"Invalid JSON: {e}"})

        logger.debug(f"Echoing {len(raw)} bytes on /{path}")
        return JSONResponse(content=payload)

    return app
