from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from opnotify.config import Settings, settings as default_settings
from opnotify.dispatcher import Dispatcher
from opnotify.logging_config import configure_logging
from opnotify.response import error_response
from opnotify.routers import notifications

API_VERSION = "0.1.0"


def create_app(
    dispatcher: Optional[Dispatcher] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level, json_format=settings.json_logs)
        app.state.dispatcher.start()
        yield
        await app.state.dispatcher.aclose()

    app = FastAPI(
        title="opnotify",
        description="Deliver operator status notifications to Slack, Teams or Mailgun.",
        version=API_VERSION,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.dispatcher = dispatcher or Dispatcher(settings=settings)

    # --- Exception Handlers ---

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.status_code, exc.detail),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = []
        for err in exc.errors():
            clean = {k: v for k, v in err.items() if k != "ctx"}
            if "msg" in clean:
                clean["msg"] = str(clean["msg"])
            errors.append(clean)
        content = error_response(422, "Validation error")
        content["error"]["details"] = errors
        return JSONResponse(status_code=422, content=content)

    # --- Routes ---

    api_v1 = APIRouter(prefix="/v1")
    api_v1.include_router(notifications.router)
    app.include_router(api_v1)

    @app.get("/", summary="API root")
    async def root():
        return {"name": settings.app_name, "status": "ok", "version": API_VERSION}

    @app.get("/health", summary="Health check")
    async def health_ping():
        dispatcher: Dispatcher = app.state.dispatcher
        status = "healthy" if dispatcher.running and not dispatcher.closed else "degraded"
        return {
            "status": status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": API_VERSION,
            "checks": {
                "dispatcher": "running" if dispatcher.running else "stopped",
                "pending": dispatcher.pending(),
                "processed": dispatcher.processed,
            },
        }

    return app


app = create_app()
