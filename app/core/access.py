"""
Politique d'accès aux pages protégées.

evaluate_access() est une fonction pure : elle ne fait aucune navigation,
elle renvoie seulement la décision. C'est le RouteGate (app.api.deps) qui
applique la redirection.
"""
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict

from app.schemas.auth import Plan, User

# Ordre total des offres. "admin" est au-dessus de tout.
PLAN_HIERARCHY = {
    "guest": 0,
    "free": 1,
    "basic": 2,
    "pro": 3,
    "admin": 4,
}

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"
UPGRADE_PATH = "/upgrade"

class DecisionKind(str, Enum):
    ALLOW = "allow"
    WAIT = "wait"
    REDIRECT = "redirect"

class AccessDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: DecisionKind
    location: Optional[str] = None

ALLOW = AccessDecision(kind=DecisionKind.ALLOW)
WAIT = AccessDecision(kind=DecisionKind.WAIT)

def redirect(location: str) -> AccessDecision:
    return AccessDecision(kind=DecisionKind.REDIRECT, location=location)

class AuthState(BaseModel):
    is_authenticated: bool = False
    user: Optional[User] = None
    is_loading: bool = False

def plan_level(plan: Union[Plan, str, None]) -> int:
    """Niveau d'une offre. Une valeur inconnue vaut 0 (le plus restrictif)."""
    if isinstance(plan, Enum):
        plan = plan.value
    return PLAN_HIERARCHY.get(plan, 0)

def evaluate_access(
    auth_state: AuthState,
    required_plan: Union[Plan, str] = Plan.GUEST,
    admin_only: bool = False,
) -> AccessDecision:
    """
    Règles évaluées dans l'ordre, la première qui s'applique gagne :
    1. chargement en cours -> WAIT
    2. non connecté -> /login
    3. page admin et rôle != admin -> /dashboard (même si l'offre suffit)
    4. rôle != admin et offre insuffisante -> /upgrade
    5. sinon ALLOW
    """
    if auth_state.is_loading:
        return WAIT

    if not auth_state.is_authenticated:
        return redirect(LOGIN_PATH)

    user = auth_state.user or User()

    if admin_only and not user.is_admin:
        return redirect(DASHBOARD_PATH)

    if not user.is_admin and plan_level(user.plan) < plan_level(required_plan):
        return redirect(UPGRADE_PATH)

    return ALLOW
