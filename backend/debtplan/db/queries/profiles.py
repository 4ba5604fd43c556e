from fastapi import HTTPException

from debtplan.db.queries.debts import get_debts_by_profile_id
from debtplan.models.profile import DebtProfile, ProfileSummary
from debtplan.models.settings import PlanSettings


def list_profiles(conn) -> list[ProfileSummary]:
    """List stored debt profiles with summary stats."""
    query = """
        SELECT p.ProfileID, p.Name, p.Strategy,
               COUNT(d.DebtID) AS DebtCount,
               COALESCE(SUM(CASE WHEN d.Included = 1 THEN d.Balance ELSE 0 END), 0) AS TotalBalance
        FROM DebtProfiles p
        LEFT JOIN ProfileDebts d ON d.ProfileID = p.ProfileID
        GROUP BY p.ProfileID, p.Name, p.Strategy
        ORDER BY p.Name
    """
    cursor = conn.cursor()
    cursor.execute(query)
    rows = cursor.fetchall()

    return [
        ProfileSummary(
            profile_id=str(row.ProfileID),
            name=row.Name,
            debt_count=row.DebtCount,
            total_balance=float(row.TotalBalance or 0),
            strategy=row.Strategy or None,
        )
        for row in rows
    ]


def get_profile_by_id(conn, profile_id: str) -> DebtProfile:
    """Fetch a profile's settings with its raw debts."""
    query = """
        SELECT ProfileID, Name, Strategy, ExtraMonthly, OneTimeExtra,
               StartDate, MaxMonths, RollOverMinimums
        FROM DebtProfiles
        WHERE ProfileID = ?
    """
    cursor = conn.cursor()
    cursor.execute(query, profile_id)
    row = cursor.fetchone()

    if not row:
        raise HTTPException(status_code=404, detail=f"Profile {profile_id} not found")

    settings = PlanSettings(
        strategy=row.Strategy or "snowball",
        extra_monthly=row.ExtraMonthly,
        one_time_extra=row.OneTimeExtra,
        start_date=row.StartDate,
        max_months=row.MaxMonths,
        roll_over_minimums=True if row.RollOverMinimums is None else bool(row.RollOverMinimums),
    )

    return DebtProfile(
        profile_id=str(row.ProfileID),
        name=row.Name,
        debts=get_debts_by_profile_id(conn, profile_id),
        settings=settings,
    )
