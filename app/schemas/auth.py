from typing import Any, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict

class Role(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"

class Plan(str, Enum):
    GUEST = "guest"
    FREE = "free"
    BASIC = "basic"
    PRO = "pro"

# Enveloppe commune à toutes les réponses JSON de l'API
class Envelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool
    message: Optional[str] = None
    data: Optional[Any] = None

class Subscription(BaseModel):
    model_config = ConfigDict(extra="allow")

    plan: Optional[str] = None
    status: Optional[str] = None

# Utilisateur tel que renvoyé par le backend (/api/auth/me).
# Les champs de profil (_id, name, email, usage...) sont conservés tels quels.
class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: Optional[str] = None
    subscription: Optional[Subscription] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    @property
    def plan(self) -> str:
        if self.subscription and self.subscription.plan:
            return self.subscription.plan
        return Plan.GUEST.value
