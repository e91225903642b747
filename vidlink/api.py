from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from vidlink.config import ExtractConfig
from vidlink.errors import FetchTimeout, InvalidInput, UpstreamUnavailable
from vidlink.http_utils import build_fetcher
from vidlink.runner import Fetcher, error_payload, not_found_payload, resolve_video_urls

LOGGER = logging.getLogger(__name__)


def create_app(config: ExtractConfig | None = None, fetcher: Fetcher | None = None) -> FastAPI:
    config = config or ExtractConfig.from_env()

    app = FastAPI(title="vidlink")
    app.state.config = config
    app.state.fetcher = fetcher or build_fetcher(config)

    # Browser frontends call this directly from any origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict:
        return {"ok": True}

    @app.options("/api/extract")
    async def extract_preflight() -> Response:
        return Response(status_code=200)

    @app.get("/api/extract")
    async def extract_videos(request: Request, url: str | None = None) -> JSONResponse:
        try:
            outcome = await resolve_video_urls(url, request.app.state.fetcher, request.app.state.config)
        except InvalidInput as exc:
            return JSONResponse(error_payload(str(exc)), status_code=400)
        except FetchTimeout as exc:
            return JSONResponse(error_payload(str(exc)), status_code=504)
        except UpstreamUnavailable as exc:
            return JSONResponse(error_payload(str(exc)), status_code=502)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Handler error")
            return JSONResponse(
                error_payload("Server error", error=f"{type(exc).__name__}: {exc}"),
                status_code=500,
            )

        if not outcome.found:
            return JSONResponse(not_found_payload(outcome), status_code=404)
        return JSONResponse(outcome.to_payload())

    return app
