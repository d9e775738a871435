from typing import List
from sqlalchemy import select
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.models.activity import Activity

async def log_activity(
    db: AsyncSession,
    group_id: int,
    group_name: str,
    type: str,
    description: str,
    user_id: str,
    user_name: str,
):
    # caller owns the commit
    activity = Activity(
        group_id=group_id,
        group_name=group_name,
        type=type,
        description=description,
        user_id=user_id,
        user_name=user_name,
    )
    db.add(activity)
    return activity

async def get_recent_activities(db: AsyncSession, group_ids: List[int], limit: int = 20):
    if not group_ids:
        return []

    q = (
        select(Activity)
        .where(Activity.group_id.in_(group_ids))
        .order_by(Activity.created_at.desc(), Activity.id.desc())
        .limit(limit)
    )
    res = await db.execute(q)
    return res.scalars().all()

async def delete_activity(db: AsyncSession, activity_id: int):
    activity = await db.get(Activity, activity_id)
    if not activity:
        raise HTTPException(404, "Activity not found")

    await db.delete(activity)
    await db.commit()
    return {"status": "deleted"}
