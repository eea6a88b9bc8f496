import pytest

from app.core.access import (
    AuthState,
    DecisionKind,
    PLAN_HIERARCHY,
    evaluate_access,
    plan_level,
)
from app.schemas.auth import Plan, User

def member(plan="free"):
    return AuthState(is_authenticated=True, user=User(role="member", subscription={"plan": plan}))

def admin(plan=None):
    subscription = {"plan": plan} if plan else None
    return AuthState(is_authenticated=True, user=User(role="admin", subscription=subscription))

def test_plan_hierarchy_is_a_total_order():
    levels = [PLAN_HIERARCHY[p] for p in ("guest", "free", "basic", "pro", "admin")]
    assert levels == [0, 1, 2, 3, 4]
    for plan in Plan:
        assert plan.value in PLAN_HIERARCHY

def test_unknown_plan_is_most_restrictive():
    assert plan_level("registered") == 0
    assert plan_level(None) == 0
    assert plan_level(Plan.PRO) == 3

def test_loading_waits():
    decision = evaluate_access(AuthState(is_loading=True, is_authenticated=True), Plan.PRO, admin_only=True)
    assert decision.kind is DecisionKind.WAIT
    assert decision.location is None

@pytest.mark.parametrize("required_plan", list(Plan))
@pytest.mark.parametrize("admin_only", [True, False])
def test_unauthenticated_redirects_to_login(required_plan, admin_only):
    state = AuthState(is_authenticated=False, user=User(role="admin"))
    decision = evaluate_access(state, required_plan, admin_only)
    assert decision.kind is DecisionKind.REDIRECT
    assert decision.location == "/login"

@pytest.mark.parametrize("required_plan", list(Plan))
def test_admin_is_always_allowed(required_plan):
    assert evaluate_access(admin(), required_plan).kind is DecisionKind.ALLOW
    assert evaluate_access(admin(), required_plan, admin_only=True).kind is DecisionKind.ALLOW

def test_free_member_needs_upgrade_for_pro():
    decision = evaluate_access(member("free"), Plan.PRO)
    assert decision.kind is DecisionKind.REDIRECT
    assert decision.location == "/upgrade"

def test_pro_member_is_allowed_on_basic():
    assert evaluate_access(member("pro"), Plan.BASIC).kind is DecisionKind.ALLOW

def test_equal_plan_is_allowed():
    assert evaluate_access(member("basic"), Plan.BASIC).kind is DecisionKind.ALLOW

def test_admin_only_blocks_member_even_with_sufficient_plan():
    decision = evaluate_access(member("pro"), Plan.GUEST, admin_only=True)
    assert decision.location == "/dashboard"

def test_admin_only_check_comes_before_plan_check():
    # offre insuffisante ET page admin : c'est /dashboard qui gagne
    decision = evaluate_access(member("guest"), Plan.PRO, admin_only=True)
    assert decision.location == "/dashboard"

def test_missing_subscription_defaults_to_guest():
    state = AuthState(is_authenticated=True, user=User(role="member"))
    assert evaluate_access(state, Plan.GUEST).kind is DecisionKind.ALLOW
    assert evaluate_access(state, Plan.FREE).location == "/upgrade"

def test_unknown_user_plan_counts_as_guest():
    assert evaluate_access(member("registered"), Plan.FREE).location == "/upgrade"

def test_unknown_role_is_not_admin():
    state = AuthState(is_authenticated=True, user=User(role="user", subscription={"plan": "pro"}))
    assert evaluate_access(state, admin_only=True).location == "/dashboard"

def test_default_request_only_needs_a_session():
    assert evaluate_access(member("guest")).kind is DecisionKind.ALLOW
