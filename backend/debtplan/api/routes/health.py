from fastapi import APIRouter

from debtplan.db.connection import db_pool
from debtplan.engine.strategies import list_strategy_names
from debtplan.services.plan_service import engine_limits

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    limits = engine_limits()
    return {
        "status": "ok",
        "database": db_pool.status(),
        "engine": {
            "closure_epsilon": limits.closure_epsilon,
            "max_months": limits.max_months,
            "strategies": list_strategy_names(),
        },
    }
