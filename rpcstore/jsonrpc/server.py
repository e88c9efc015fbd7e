"""FastAPI and uvicorn helpers for serving JSON-RPC over HTTP."""

from __future__ import annotations

import json

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.concurrency import run_in_threadpool

from .handler import Assigner, Dispatcher, parse_error_response


def create_rpc_app(
    assigner: Assigner,
    *,
    rpc_path: str = "/rpc",
    title: str = "rpcstore",
    version: str = "0.0.0",
) -> FastAPI:
    """Create a FastAPI app dispatching ``POST rpc_path`` bodies to ``assigner``.

    Handlers run in the threadpool, so concurrent requests may invoke the
    same handler in parallel.
    """
    app = FastAPI(title=title, version=version)
    dispatcher = Dispatcher(assigner)

    @app.post(rpc_path)
    async def rpc(request: Request) -> Response:
        body = await request.body()
        try:
            decoded = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            return JSONResponse(parse_error_response(str(exc)))

        reply = await run_in_threadpool(dispatcher.dispatch, decoded)
        if reply is None:
            return Response(status_code=204)
        return JSONResponse(reply)

    return app


def run_app(
    app: FastAPI,
    *,
    host: str = "127.0.0.1",
    port: int = 8750,
    log_level: str = "info",
) -> None:
    """Run one FastAPI app through uvicorn."""
    uvicorn.run(app, host=host, port=port, log_level=log_level)
