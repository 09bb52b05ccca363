"""REST API for the league admin panel."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from leaguepanel.api.schemas import CreatedResponse, HealthResponse, MessageResponse
from leaguepanel.auth import Identity, authenticate
from leaguepanel.config import Settings, load_settings
from leaguepanel.context import AppContext
from leaguepanel.errors import LeaguePanelError, StoreError, ValidationError
from leaguepanel.handlers import ResourceHandler, build_handlers


logger = logging.getLogger("uvicorn.error")

BANNER = "Admin Panel Backend is running!"
CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(LeaguePanelError)
    async def league_error(request: Request, exc: LeaguePanelError) -> JSONResponse:
        return _message(exc.status_code, exc.message)


async def _read_payload(request: Request) -> Any:
    """Decode the JSON body after the route dependencies have run; an empty body is ``None``."""
    body = await request.body()
    if not body.strip():
        return None
    try:
        return await request.json()
    except ValueError as exc:
        raise ValidationError("Invalid request body: malformed JSON.") from exc


def _resource_router(handler: ResourceHandler) -> APIRouter:
    router = APIRouter(prefix=f"/{handler.name}", tags=[handler.name])
    label = handler.label
    noun = handler.error_noun

    @router.get("")
    async def list_documents():
        try:
            return await handler.list()
        except StoreError:
            logger.exception("Error fetching %s", handler.name)
            return _message(500, f"Error fetching {handler.name}")

    @router.post("", status_code=201, response_model=CreatedResponse)
    async def create_document(request: Request):
        payload = await _read_payload(request)
        try:
            doc_id = await handler.create(payload)
        except StoreError:
            logger.exception("Error adding %s", noun)
            return _message(500, f"Error adding {noun}")
        return CreatedResponse(message=f"{label} added successfully", id=doc_id)

    @router.put("/{doc_id}", response_model=MessageResponse)
    async def update_document(doc_id: str, request: Request):
        payload = await _read_payload(request)
        try:
            await handler.update(doc_id, payload)
        except StoreError:
            logger.exception("Error updating %s %s", noun, doc_id)
            return _message(500, f"Error updating {noun}")
        return MessageResponse(message=f"{label} updated successfully")

    @router.delete("/{doc_id}", response_model=MessageResponse)
    async def delete_document(doc_id: str):
        try:
            await handler.delete(doc_id)
        except StoreError:
            logger.exception("Error deleting %s %s", noun, doc_id)
            return _message(500, f"Error deleting {noun}")
        return MessageResponse(message=f"{label} deleted successfully")

    return router


def create_app(context: AppContext | None = None, *, settings: Settings | None = None) -> FastAPI:
    if context is None:
        context = AppContext.from_settings(settings or load_settings())
    settings = context.settings

    app = FastAPI(title="leaguepanel admin API")
    app.state.context = context
    handlers = build_handlers(context)
    app.state.handlers = handlers

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_methods=CORS_METHODS,
        allow_headers=["*"],
        allow_credentials=True,
    )
    _install_error_handlers(app)

    bearer = HTTPBearer(auto_error=False)

    async def require_identity(
        request: Request,
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    ) -> Identity:
        identity = await authenticate(
            context.auth,
            credentials.credentials if credentials else None,
            require_admin=settings.require_admin_claim,
        )
        request.state.identity = identity
        return identity

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return BANNER

    @app.get("/health", response_model=HealthResponse)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    for handler in handlers.values():
        app.include_router(_resource_router(handler), dependencies=[Depends(require_identity)])

    return app
