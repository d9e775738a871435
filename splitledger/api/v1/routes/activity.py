from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.db.session import get_db
from splitledger.schemas.activity import ActivityOut
from splitledger.services.activity_service import delete_activity, get_recent_activities

router = APIRouter()

@router.get("/", response_model=list[ActivityOut])
async def recent_activities(
    group_id: List[int] = Query(default=[]),
    limit: int = Query(default=20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    return await get_recent_activities(db, group_id, limit)

@router.delete("/{activity_id}")
async def del_activity(activity_id: int, db: AsyncSession = Depends(get_db)):
    return await delete_activity(db, activity_id)
