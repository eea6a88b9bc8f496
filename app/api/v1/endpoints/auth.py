import logging
from typing import Any, Optional
from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from app.api.deps import get_backend
from app.schemas.auth import Envelope
from app.services.backend_service import (
    INTERNAL_ERROR_MESSAGE,
    BackendService,
    TransportError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

router = APIRouter()

def failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=Envelope(success=False, message=message).model_dump(exclude_none=True),
    )

def field(body: Any, name: str) -> Any:
    """Lecture tolérante d'un champ : le corps est transmis tel quel au backend."""
    return body.get(name) if isinstance(body, dict) else None

@router.post("/login")
async def login(request: Request, backend: BackendService = Depends(get_backend)):
    try:
        body = await request.json()
        logger.info("Login request: email=%s", field(body, "email"))
        data = await backend.login(body)
    except UpstreamError as exc:
        logger.info("Login refusé par le backend (%s)", exc.status_code)
        return failure(exc.status_code, exc.message)
    except (TransportError, ValueError):
        logger.exception("Login API error")
        return failure(500, INTERNAL_ERROR_MESSAGE)

    return JSONResponse(content=data)

@router.post("/register")
async def register(request: Request, backend: BackendService = Depends(get_backend)):
    try:
        body = await request.json()
        logger.info("Register request: email=%s name=%s", field(body, "email"), field(body, "name"))

        if not all(field(body, name) for name in ("name", "email", "password")):
            return failure(400, "Name, email, and password are required.")

        data = await backend.register(body)
    except UpstreamError as exc:
        logger.info("Inscription refusée par le backend (%s)", exc.status_code)
        return failure(exc.status_code, exc.message)
    except (TransportError, ValueError):
        logger.exception("Registration API error")
        return failure(500, INTERNAL_ERROR_MESSAGE)

    return JSONResponse(content=data)

@router.get("/me")
async def me(
    authorization: Optional[str] = Header(default=None),
    backend: BackendService = Depends(get_backend),
):
    # Pas de header : on répond sans contacter le backend
    if not authorization:
        return failure(401, "No authorization header")

    try:
        data = await backend.me(authorization)
    except UpstreamError as exc:
        return failure(exc.status_code, exc.message)
    except TransportError:
        logger.exception("Get me API error")
        return failure(500, INTERNAL_ERROR_MESSAGE)

    return JSONResponse(content=data)

@router.get("/logout")
async def logout():
    """
    Rien à faire côté serveur : le client supprime son token local.
    """
    return Envelope(success=True, message="Logged out successfully").model_dump(exclude_none=True)
