from fastapi import APIRouter, Depends

from debtplan.api.deps import get_db
from debtplan.db.queries.profiles import get_profile_by_id, list_profiles
from debtplan.models.plan import PlanResult
from debtplan.models.profile import DebtProfile, ProfileSummary
from debtplan.services.plan_service import run_plan

router = APIRouter(tags=["profiles"])


@router.get("/profiles", response_model=list[ProfileSummary])
def get_profiles(conn=Depends(get_db)):
    return list_profiles(conn)


@router.get("/profiles/{profile_id}", response_model=DebtProfile)
def get_profile(profile_id: str, conn=Depends(get_db)):
    return get_profile_by_id(conn, profile_id)


@router.post("/profiles/{profile_id}/plan", response_model=PlanResult)
def plan_for_profile(profile_id: str, conn=Depends(get_db)):
    """Recompute the plan from a stored profile. The result is not persisted."""
    profile = get_profile_by_id(conn, profile_id)
    return run_plan(profile.debts, profile.settings)
