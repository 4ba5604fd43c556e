from fastapi import APIRouter, HTTPException, UploadFile
from pydantic import BaseModel

from debtplan.engine.normalizer import normalize_debts
from debtplan.models.debt import Debt, DebtInput, DebtSheet
from debtplan.services.debt_sheet_parser import parse_debt_sheet

router = APIRouter(tags=["debts"])

_UPLOAD_TYPES = ("xlsx", "xls", "csv")


class NormalizeRequest(BaseModel):
    debts: list[DebtInput]


@router.post("/debts/normalize", response_model=list[Debt])
def normalize(request: NormalizeRequest):
    """Return the engine-ready form of raw debts, in input order."""
    return normalize_debts(request.debts)


@router.post("/debts/upload", response_model=DebtSheet)
async def upload_debt_sheet(file: UploadFile):
    """Upload an Excel or CSV debt sheet and return the parsed debts."""
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    ext = file.filename.rsplit(".", 1)[-1].lower() if "." in file.filename else ""
    if ext not in _UPLOAD_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '.{ext}'. Please upload .xlsx, .xls or .csv",
        )

    try:
        sheet = parse_debt_sheet(file.file, file.filename)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return sheet
