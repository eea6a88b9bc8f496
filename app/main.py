import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
import uvicorn

from app.core.config import settings
from app.core.logging import configure_logging
from app.db.session import connect_db
from app.api.deps import AccessPending, AccessRedirect
from app.api.v1.endpoints import auth, pages
from app.schemas.auth import Envelope

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Fonction exécutée au démarrage (avant le yield)
    et à l'arrêt (après le yield) de l'application.
    """
    configure_logging(settings.LOG_LEVEL)
    logger.info("Démarrage de %s (backend: %s)", settings.PROJECT_NAME, settings.BACKEND_URL)
    connect_db()
    yield
    logger.info("Arrêt de %s", settings.PROJECT_NAME)

app = FastAPI(
    title=settings.PROJECT_NAME,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Sorties du RouteGate ---
@app.exception_handler(AccessRedirect)
async def access_redirect_handler(request: Request, exc: AccessRedirect):
    return RedirectResponse(url=exc.location, status_code=303)

@app.exception_handler(AccessPending)
async def access_pending_handler(request: Request, exc: AccessPending):
    return JSONResponse(
        status_code=202,
        content=Envelope(success=False, message="Loading").model_dump(exclude_none=True),
        headers={"Retry-After": "1"},
    )

# Inclusion des routes
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(pages.router, tags=["Pages"])

@app.get("/health")
def health_check():
    return {"status": "ok"}

def run():
    """Point d'entrée `boostpro-gateway` : lance le serveur uvicorn."""
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
