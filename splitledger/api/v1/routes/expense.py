from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.db.session import get_db
from splitledger.schemas.expense import ExpenseCreate, ExpenseOut
from splitledger.services.expense_services import create_expense, delete_expense, get_expenses_by_group

router = APIRouter()

@router.post("/{group_id}/add", response_model=ExpenseOut, status_code=201)
async def add_expense(group_id: int, data: ExpenseCreate, db: AsyncSession = Depends(get_db)):
    return await create_expense(db, data, group_id)

@router.get("/{group_id}/all", response_model=list[ExpenseOut])
async def all_expenses(group_id: int, db: AsyncSession = Depends(get_db)):
    return await get_expenses_by_group(db, group_id)

@router.delete("/{expense_id}")
async def del_expense(expense_id: int, db: AsyncSession = Depends(get_db)):
    return await delete_expense(db, expense_id)
