from io import BytesIO

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import StreamingResponse

from debtplan.engine.normalizer import normalize_debts
from debtplan.models.insights import PlanInsights
from debtplan.models.plan import PlanResult
from debtplan.models.scenario import ScenarioComparison, StrategyComparison
from debtplan.models.settings import CompareRequest, ExportFormat, PlanRequest, WhatIfRequest
from debtplan.services.plan_service import (
    NoActiveDebtsError,
    run_comparison,
    run_plan,
    run_projection_comparison,
    run_strategy_comparison,
    run_what_if,
)
from debtplan.services.plan_views import build_insights, schedule_csv, schedule_xlsx

router = APIRouter(tags=["plans"])


@router.post("/plans/compute", response_model=PlanResult)
def compute_plan_endpoint(request: PlanRequest):
    """Compute a full payoff schedule for inline debts and settings.

    An empty or fully excluded debt list returns a zero-month plan.
    """
    return run_plan(request.debts, request.plan_settings())


@router.post("/plans/compare", response_model=ScenarioComparison)
def compare_plans(request: CompareRequest):
    return run_comparison(request.debts, request.a, request.b)


@router.post("/plans/strategies", response_model=StrategyComparison)
def compare_strategies_endpoint(request: PlanRequest):
    """Snowball, avalanche and minimum-only side by side."""
    return run_strategy_comparison(request.debts, request.plan_settings())


@router.post("/plans/what-if", response_model=ScenarioComparison)
def what_if(request: WhatIfRequest):
    """Configured plan (a) vs. overridden monthly extra and/or lump sum (b)."""
    try:
        return run_what_if(
            request.debts,
            request.settings,
            monthly_extra=request.monthly_extra,
            lump_sum=request.lump_sum,
        )
    except NoActiveDebtsError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/plans/projection", response_model=ScenarioComparison)
def projection(request: PlanRequest):
    """Snowball (a) vs. avalanche (b) for the same debts and amounts."""
    try:
        return run_projection_comparison(request.debts, request.plan_settings())
    except NoActiveDebtsError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/plans/insights", response_model=PlanInsights)
def plan_insights(request: PlanRequest):
    plan = run_plan(request.debts, request.plan_settings())
    return build_insights(plan, normalize_debts(request.debts))


_EXPORT_MEDIA_TYPES = {
    ExportFormat.csv: "text/csv",
    ExportFormat.xlsx: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


@router.post("/plans/export")
def export_plan(
    request: PlanRequest,
    format: ExportFormat = Query(ExportFormat.csv, description="'csv' or 'xlsx'"),
):
    """Download the payoff schedule as CSV, or as an xlsx workbook with a summary sheet."""
    plan = run_plan(request.debts, request.plan_settings())
    content = schedule_xlsx(plan) if format == ExportFormat.xlsx else schedule_csv(plan)
    filename = f"debt-plan-{plan.strategy.value}.{format.value}"
    return StreamingResponse(
        BytesIO(content),
        media_type=_EXPORT_MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
