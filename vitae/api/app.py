"""
FastAPI application.

Exposes the three JSON endpoints (ats-analyzer, resume-ai-helper, resume-save)
plus the template catalog and a health check. CORS is fully permissive and a
bare OPTIONS request to any endpoint short-circuits with the CORS headers.

Every handler failure is answered with HTTP 500 and an error envelope:
{"error": message}, or {"success": false, "error": message} for resume-save.
"""

from typing import Any, Callable, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from vitae import __version__
from vitae.api.logger import _log_debug, _log_error, _log_info
from vitae.contexts.analysis.analyzer import ProviderFactory, handle_analyzer_request
from vitae.contexts.assistant.helper import handle_helper_request
from vitae.contexts.drafting.templates import get_resume_templates
from vitae.contexts.persistence.saver import handle_save_request
from vitae.contexts.persistence.store import PersistenceError, ResumeStore
from vitae.utils.llm import get_provider
from vitae.utils.validation import InputValidationError

ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
}

POST_ENDPOINTS = ("/ats-analyzer", "/resume-ai-helper", "/resume-save")


def error_message(error: Exception) -> str:
    """Text for the error envelope (the exception's message attribute when it has one)."""
    return getattr(error, "message", None) or str(error) or error.__class__.__name__


def error_response(error: Exception, with_success_flag: bool = False) -> JSONResponse:
    body: Dict[str, Any] = {"error": error_message(error)}
    if with_success_flag:
        body = {"success": False, **body}
    return JSONResponse(body, status_code=500, headers=CORS_HEADERS)


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as e:
        raise InputValidationError("Request body must be valid JSON") from e


async def _dispatch(
    request: Request,
    handler: Callable[[Any], Dict[str, Any]],
    with_success_flag: bool = False,
) -> JSONResponse:
    """Decode the body, run the sync handler in the threadpool, wrap the outcome."""
    try:
        payload = await _read_json(request)
        result = await run_in_threadpool(handler, payload)
    except Exception as e:
        _log_error(f"{request.url.path} failed ({e.__class__.__name__}): {error_message(e)}")
        return error_response(e, with_success_flag)

    return JSONResponse(result, headers=CORS_HEADERS)


def create_app(provider_factory: ProviderFactory = get_provider, store: ResumeStore = None) -> FastAPI:
    """
    Build the API application.

    Args:
        provider_factory: Zero-argument callable returning an LLMProvider, called
                          per request that needs the generative API
        store: Table store (default: opened at VITAE_DB_PATH on first use)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(title="VITAE API", version=__version__)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=ALLOWED_HEADERS,
    )

    def get_store() -> ResumeStore:
        if app.state.store is None:
            app.state.store = ResumeStore()
        return app.state.store

    async def preflight() -> PlainTextResponse:
        return PlainTextResponse("ok", headers=CORS_HEADERS)

    for path in POST_ENDPOINTS:
        app.add_api_route(path, preflight, methods=["OPTIONS"], include_in_schema=False)

    @app.post("/ats-analyzer")
    async def ats_analyzer(request: Request):
        _log_info("POST /ats-analyzer")
        return await _dispatch(
            request, lambda payload: handle_analyzer_request(payload, provider_factory)
        )

    @app.post("/resume-ai-helper")
    async def resume_ai_helper(request: Request):
        _log_info("POST /resume-ai-helper")
        return await _dispatch(
            request, lambda payload: handle_helper_request(payload, get_store(), provider_factory)
        )

    @app.post("/resume-save")
    async def resume_save(request: Request):
        _log_info("POST /resume-save")
        return await _dispatch(
            request,
            lambda payload: handle_save_request(payload, get_store()),
            with_success_flag=True,
        )

    def list_templates():
        try:
            template_store = get_store()
        except PersistenceError as e:
            _log_error(f"Template store unavailable: {e.message}")
            template_store = None
        return [template.to_dict() for template in get_resume_templates(template_store)]

    @app.get("/resume-templates")
    async def resume_templates():
        templates = await run_in_threadpool(list_templates)
        _log_debug(f"Serving {len(templates)} templates")
        return JSONResponse(templates, headers=CORS_HEADERS)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
