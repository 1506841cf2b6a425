"""
HTTP API adapter for the generation backend.

Architectural role:
- Expose the login/availability probe and the generation endpoint.
- Parse request JSON and hand it to `GenerationDispatcher`.
- Shape dispatcher results into `{ok, output}` / `{ok, error}` JSON.
- Serve the static front-end from `public/` when that directory exists.

Endpoint responsibilities:
- `POST /api/login`: report which providers have complete credentials.
- `POST /api/generate`: run one generation request.

API request lifecycle (`POST /api/generate`):
1. Reject bodies larger than `MAX_BODY_BYTES` (HTTP 413).
2. Parse JSON (`provider`, `task`, `input`, optional `mode`).
3. Run the blocking dispatcher call in a worker thread.
4. Map the result: ok -> 200, client error -> 400, anything else -> 500.

Error handling strategy:
- Malformed or non-object JSON is a client error (HTTP 400).
- Dispatcher failures are already structured results; nothing is re-raised.

Side effects:
- Outbound HTTP calls to the selected vendor (through the dispatcher).
- Loads environment variables at import time via `load_dotenv()`.
"""

from dotenv import load_dotenv

load_dotenv()

import asyncio
import json
import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.core.contracts import GenerationRequest, GenerationResult
from app.core.errors import ClientError
from app.llm.service import GenerationDispatcher


logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
PUBLIC_DIR = os.getenv("PUBLIC_DIR", os.path.join(BASE_DIR, "public"))
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", str(2 * 1024 * 1024)))

NO_PROVIDER_MESSAGE = "No provider configured. Add keys to .env"


def _status_for(result: GenerationResult) -> int:
    if result.ok:
        return 200
    if result.is_client_error:
        return 400
    return 500


def create_app(dispatcher: GenerationDispatcher | None = None, public_dir: str | None = None,
               max_body_bytes: int = MAX_BODY_BYTES) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        dispatcher: Generation dispatcher; defaults to one built from process
            settings.
        public_dir: Static front-end directory; mounted at `/` when it exists.
        max_body_bytes: Upper bound on request body size.
    """
    dispatcher = dispatcher or GenerationDispatcher()
    public_dir = PUBLIC_DIR if public_dir is None else public_dir

    app = FastAPI()
    app.state.dispatcher = dispatcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > max_body_bytes:
            return JSONResponse(
                status_code=413,
                content={"ok": False, "error": "Request body too large"},
            )
        return await call_next(request)

    # ============================================================
    # Login / availability probe
    # ============================================================

    @app.post("/api/login")
    def login():
        """Report usable providers, or HTTP 400 when none are configured."""
        available = dispatcher.list_available_providers()
        if not available:
            return JSONResponse(
                status_code=400,
                content={"ok": False, "message": NO_PROVIDER_MESSAGE},
            )
        return {"ok": True, "available": [provider.value for provider in available]}

    # ============================================================
    # Generation
    # ============================================================

    @app.post("/api/generate")
    async def generate(request: Request):
        """
        Run one generation request.

        The dispatcher call blocks on the vendor, so it runs in a worker thread.
        Concurrent requests proceed independently.
        """
        body = await request.body()
        if len(body) > max_body_bytes:
            return JSONResponse(
                status_code=413,
                content={"ok": False, "error": "Request body too large"},
            )

        try:
            payload = json.loads(body) if body else {}
            generation_request = GenerationRequest.from_payload(payload)
        except ValueError:
            result = GenerationResult.failure(ClientError("Request body must be valid JSON"))
        except ClientError as err:
            result = GenerationResult.failure(err)
        else:
            result = await asyncio.to_thread(dispatcher.generate, generation_request)

        return JSONResponse(status_code=_status_for(result), content=result.to_dict())

    # ============================================================
    # Static front-end
    # ============================================================

    if public_dir and os.path.isdir(public_dir):
        app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")
    else:
        logger.debug("No static front-end at %s", public_dir)

    return app


app = create_app()
