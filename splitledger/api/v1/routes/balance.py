from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.db.session import get_db
from splitledger.schemas.balances import GroupBalanceOut
from splitledger.services.balance_service import get_group_balances

router = APIRouter()

@router.get("/{group_id}", response_model=GroupBalanceOut)
async def group_balances(group_id: int, db: AsyncSession = Depends(get_db)):
    return await get_group_balances(db, group_id)
