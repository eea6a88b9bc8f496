from fastapi import APIRouter, Depends

from app.api.deps import RouteGate
from app.schemas.auth import Plan, User

router = APIRouter()

def page(name: str, user: User, **extra) -> dict:
    return {"success": True, "data": {"page": name, "user": user.model_dump(), **extra}}

@router.get("/dashboard")
async def dashboard(user: User = Depends(RouteGate())):
    return page("dashboard", user)

@router.get("/audit")
async def audit(user: User = Depends(RouteGate())):
    return page("audit", user)

@router.get("/keywords")
async def keywords(user: User = Depends(RouteGate())):
    return page("keywords", user)

@router.get("/competitors")
async def competitors(user: User = Depends(RouteGate(required_plan=Plan.BASIC))):
    return page("competitors", user)

@router.get("/reports")
async def reports(user: User = Depends(RouteGate(required_plan=Plan.PRO))):
    return page("reports", user)

@router.get("/admin")
async def admin(user: User = Depends(RouteGate(admin_only=True))):
    return page("admin", user)

@router.get("/upgrade")
async def upgrade(user: User = Depends(RouteGate())):
    # Page d'upgrade : il suffit d'être connecté, on affiche l'offre actuelle
    return page("upgrade", user, current_plan=user.plan)
