from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.db.session import get_db
from splitledger.schemas.user import BudgetOut, BudgetUpdate, MonthlySpendOut
from splitledger.services.user_service import get_monthly_summary, get_user_budget, update_monthly_budget

router = APIRouter()

@router.put("/{uid}/budget", response_model=BudgetOut)
async def set_budget(uid: str, data: BudgetUpdate, db: AsyncSession = Depends(get_db)):
    return await update_monthly_budget(db, uid, data.amount)

@router.get("/{uid}/budget", response_model=BudgetOut)
async def budget(uid: str, db: AsyncSession = Depends(get_db)):
    amount = await get_user_budget(db, uid)
    return BudgetOut(uid=uid, monthly_budget=float(amount) if amount is not None else None)

@router.get("/{uid}/monthly-expenses", response_model=MonthlySpendOut)
async def monthly_expenses(uid: str, db: AsyncSession = Depends(get_db)):
    return await get_monthly_summary(db, uid)
