from debtplan.models.debt import DebtInput

# Map DebtInput field names to ProfileDebts columns.
COLUMN_MAP = {
    "id": "DebtID",
    "name": "Name",
    "balance": "Balance",
    "apr": "APR",
    "min_payment": "MinPayment",
    "included": "Included",
    "due_day": "DueDay",
    "category": "Category",
}

_SQL_COLUMNS = ", ".join(COLUMN_MAP.values())


def get_debts_by_profile_id(conn, profile_id: str) -> list[DebtInput]:
    """Fetch a profile's raw debts in their stored order.

    Rows come back unnormalized; the engine normalizes them on every run.
    """
    query = f"""
        SELECT {_SQL_COLUMNS}
        FROM ProfileDebts
        WHERE ProfileID = ?
        ORDER BY SortOrder
    """
    cursor = conn.cursor()
    cursor.execute(query, profile_id)
    rows = cursor.fetchall()

    reverse_map = {v: k for k, v in COLUMN_MAP.items()}
    columns = [reverse_map.get(desc[0], desc[0]) for desc in cursor.description]

    debts = []
    for row in rows:
        data = dict(zip(columns, row))
        if data.get("included") is None:
            data["included"] = True
        debts.append(DebtInput(**data))
    return debts
