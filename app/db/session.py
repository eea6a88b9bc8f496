import logging
from typing import Optional
from sqlalchemy.engine import Engine
from sqlmodel import create_engine, Session
from app.core.config import settings

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None

def connect_db() -> Engine:
    """
    Crée (une seule fois par processus) le moteur de connexion.
    Sans DATABASE_URL l'application ne peut pas démarrer : on arrête le processus.
    """
    global _engine

    if not settings.DATABASE_URL:
        logger.critical("DATABASE_URL manquant : arrêt du processus.")
        raise SystemExit(1)

    if _engine is None:
        _engine = create_engine(settings.DATABASE_URL, echo=False)
        logger.info("Moteur de base de données prêt (%s)", _engine.url.render_as_string(hide_password=True))
    return _engine

def get_db():
    """
    Fonction de dépendance (Dependency Injection).
    Crée une session DB pour une requête, et la ferme après.
    """
    with Session(connect_db()) as session:
        yield session
