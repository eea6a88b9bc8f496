from typing import List, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "SEO BoostPro Gateway"

    # Backend qui possède l'authentification et les données utilisateur
    BACKEND_URL: str = "http://127.0.0.1:5050"
    BACKEND_TIMEOUT: float = 5.0

    # Obligatoire au démarrage (voir app.db.session.connect_db)
    DATABASE_URL: Optional[str] = None

    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    CORS_ORIGINS: List[str] = ["*"]

    @field_validator("BACKEND_URL", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    class Config:
        case_sensitive = True
        env_file = ".env"

settings = Settings()

def get_settings() -> Settings:
    """Dépendance FastAPI : la configuration construite une seule fois au démarrage."""
    return settings
