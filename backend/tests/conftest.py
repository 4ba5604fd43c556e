import sys
from unittest.mock import MagicMock

import pytest

# Mock pyodbc so tests can run without ODBC drivers installed
if "pyodbc" not in sys.modules:
    sys.modules["pyodbc"] = MagicMock()


@pytest.fixture
def abc_debts():
    """A: 0% small, B: 20% large, C: 10% medium."""
    return [
        {"id": "A", "name": "Store Card", "balance": 500, "apr": 0, "min_payment": 25},
        {"id": "B", "name": "Visa", "balance": 2000, "apr": 20, "min_payment": 60},
        {"id": "C", "name": "Car Loan", "balance": 1000, "apr": 10, "min_payment": 40},
    ]
