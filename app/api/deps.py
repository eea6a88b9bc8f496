import logging
from typing import Optional
from fastapi import Depends, Request
from pydantic import ValidationError

from app.core.access import AuthState, DecisionKind, evaluate_access
from app.core.config import Settings, get_settings
from app.schemas.auth import Plan, User
from app.services.backend_service import BackendService, TransportError, UpstreamError

logger = logging.getLogger(__name__)

class AccessRedirect(Exception):
    """Levée par le RouteGate : la page ne doit pas être rendue."""

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location

class AccessPending(Exception):
    """L'identité n'est pas encore résolue : rendre un placeholder."""

def get_backend(settings: Settings = Depends(get_settings)) -> BackendService:
    return BackendService(settings.BACKEND_URL, timeout=settings.BACKEND_TIMEOUT)

def get_credential(request: Request) -> Optional[str]:
    """Header Authorization, sinon le cookie `token` du front."""
    authorization = request.headers.get("Authorization")
    if authorization:
        return authorization
    token = request.cookies.get("token")
    if token:
        return f"Bearer {token}"
    return None

async def get_auth_state(
    request: Request,
    backend: BackendService = Depends(get_backend),
) -> AuthState:
    """
    Fournisseur d'identité : demande l'utilisateur courant au backend.
    - pas de credential ou refus du backend -> non connecté
    - backend injoignable -> chargement (le client réessaiera)
    """
    credential = get_credential(request)
    if not credential:
        return AuthState(is_authenticated=False)

    try:
        payload = await backend.me(credential)
    except UpstreamError as exc:
        logger.info("Identité refusée par le backend (%s)", exc.status_code)
        return AuthState(is_authenticated=False)
    except TransportError:
        logger.warning("Backend injoignable, identité en attente", exc_info=True)
        return AuthState(is_loading=True)

    user_data = payload.get("data")
    if not isinstance(user_data, dict):
        logger.warning("Réponse /me sans utilisateur")
        return AuthState(is_authenticated=False)

    try:
        user = User.model_validate(user_data)
    except ValidationError:
        logger.warning("Utilisateur invalide renvoyé par le backend", exc_info=True)
        return AuthState(is_authenticated=False)

    return AuthState(is_authenticated=True, user=user)

class RouteGate:
    """
    Le 'Videur' des pages protégées.
    Évalue la politique d'accès à chaque requête puis redirige,
    fait patienter, ou renvoie l'utilisateur à la route.
    """

    def __init__(self, required_plan: Plan = Plan.GUEST, admin_only: bool = False):
        self.required_plan = required_plan
        self.admin_only = admin_only

    async def __call__(self, auth_state: AuthState = Depends(get_auth_state)) -> User:
        decision = evaluate_access(auth_state, self.required_plan, self.admin_only)

        if decision.kind is DecisionKind.WAIT:
            raise AccessPending()
        if decision.kind is DecisionKind.REDIRECT:
            raise AccessRedirect(decision.location)

        return auth_state.user
