from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api import (
    admin_router,
    ai_router,
    auth_router,
    complaints_router,
    recipes_router,
    uploads_router,
)
from .auth.users import seed_admin
from .config import DEFAULT_SETTINGS
from .errors import AppError
from .storage import get_store

logging.basicConfig(
    level=DEFAULT_SETTINGS.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if DEFAULT_SETTINGS.admin_email and DEFAULT_SETTINGS.admin_password:
        seed_admin(get_store(), DEFAULT_SETTINGS.admin_email, DEFAULT_SETTINGS.admin_password)
    yield


app = FastAPI(title="RecipeShare API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error mapping ────────────────────────────────────────────────────────


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())[1:])
        messages.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages) or "Invalid request"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ── Routers ──────────────────────────────────────────────────────────────

app.include_router(auth_router)
app.include_router(recipes_router)
app.include_router(ai_router)
app.include_router(complaints_router)
app.include_router(admin_router)
app.include_router(uploads_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Uploaded assets ──────────────────────────────────────────────────────

DEFAULT_SETTINGS.upload_dir.mkdir(parents=True, exist_ok=True)
app.mount(
    DEFAULT_SETTINGS.upload_base_url,
    StaticFiles(directory=str(DEFAULT_SETTINGS.upload_dir)),
    name="uploads",
)
