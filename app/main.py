from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.api import api_router
from app.core.config import Settings, settings as default_settings
from app.core.exceptions import ConfigurationError, StorageError, ValidationError
from app.core.storage import resolve_storage_config
from app.services.waitlist_service import WaitlistIntake
from app.services.waitlist_store import WaitlistStore, build_store

logger = logging.getLogger(__name__)

# Configure audit logger (JSON lines)
audit_logger = logging.getLogger("audit")
if not audit_logger.handlers:
    handler = logging.StreamHandler()
    # Keep raw JSON line without extra prefixes
    handler.setFormatter(logging.Formatter("%(message)s"))
    audit_logger.addHandler(handler)
audit_logger.setLevel(logging.INFO)
# Do not propagate to root to avoid duplication
audit_logger.propagate = False

HTTP_ERROR_MESSAGES = {
    404: "Route not found.",
    405: "Method not allowed.",
}


class FrontendFiles(StaticFiles):
    """Static bundle with single-page-app fallback to index.html"""

    async def get_response(self, path: str, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as e:
            if e.status_code != 404:
                raise
            return await super().get_response("index.html", scope)


def cors_headers(origin: str) -> dict:
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


def create_app(settings: Optional[Settings] = None, store: Optional[WaitlistStore] = None) -> FastAPI:
    settings = settings or default_settings
    if store is None:
        store = build_store(resolve_storage_config(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # A file store that cannot create its file should stop the server from starting
        await store.initialize()
        logger.info(f"🚀 Waitlist intake ready (backend={store.name})")
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(
        title="Waitlist API",
        description="Collects waitlist sign-ups for the marketing site.",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url=None,
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.waitlist_store = store
    app.state.waitlist_intake = WaitlistIntake(store)

    shared_headers = cors_headers(settings.CORS_ORIGIN)

    @app.middleware("http")
    async def apply_response_headers(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=shared_headers)
        response = await call_next(request)
        response.headers.update(shared_headers)
        response.headers["X-Content-Type-Options"] = "nosniff"
        return response

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(ConfigurationError)
    async def handle_configuration_error(request: Request, exc: ConfigurationError):
        logger.error(f"❌ Waitlist storage not usable ({exc.error_code})")
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logger.error(f"❌ Waitlist storage error: {exc.message} details={exc.details}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": StorageError.public_message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else None
        if exc.status_code in HTTP_ERROR_MESSAGES and message in (None, "Not Found", "Method Not Allowed"):
            message = HTTP_ERROR_MESSAGES[exc.status_code]
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message or "Request failed."},
            headers=getattr(exc, "headers", None),
        )

    app.include_router(api_router, prefix="/api")

    @app.api_route("/api", methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
    async def api_root_not_found():
        raise StarletteHTTPException(status_code=404, detail="Route not found.")

    frontend_dir = Path.cwd() / settings.FRONTEND_DIST_DIR
    if frontend_dir.is_dir():
        app.mount("/", FrontendFiles(directory=frontend_dir, html=True), name="frontend")
    else:
        logger.info(f"Frontend build not found at {frontend_dir}; serving the API only")

    return app


app = create_app()
