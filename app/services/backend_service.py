import logging
from typing import Any, Dict, Optional
import httpx
from pydantic import ValidationError

from app.schemas.auth import Envelope

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

class BackendError(Exception):
    """Erreur de base pour tout appel au backend."""

class UpstreamError(BackendError):
    """Le backend a répondu avec un statut non-2xx."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message

class TransportError(BackendError):
    """Réseau, JSON illisible ou enveloppe invalide. Aucun détail n'est renvoyé au client."""

class BackendService:
    """
    Client du backend d'authentification.
    Chaque appel ouvre son propre AsyncClient : aucun état partagé entre requêtes,
    aucun retry.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        fallback_message: str,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.request(method, path, json=json, headers=request_headers)
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise TransportError(f"{method} {path} failed") from exc

        logger.info("Backend %s %s -> %s", method, path, response.status_code)

        # --- ÉCHEC CÔTÉ BACKEND : on garde son statut et son message ---
        if not response.is_success:
            message = data.get("message") if isinstance(data, dict) else None
            raise UpstreamError(response.status_code, message or fallback_message)

        # Validation de l'enveloppe à la frontière, le corps est ensuite renvoyé tel quel
        try:
            Envelope.model_validate(data)
        except ValidationError as exc:
            raise TransportError(f"{method} {path} returned an invalid envelope") from exc

        return data

    async def login(self, credentials: Any) -> Dict[str, Any]:
        return await self._request("POST", "/api/auth/login", "Login failed", json=credentials)

    async def register(self, payload: Any) -> Dict[str, Any]:
        return await self._request("POST", "/api/auth/register", "Registration failed", json=payload)

    async def me(self, authorization: str) -> Dict[str, Any]:
        return await self._request(
            "GET",
            "/api/auth/me",
            "Failed to get user",
            headers={"Authorization": authorization},
        )
