import logging
from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.core.dependencies import fetch_member_map, get_group_or_404
from splitledger.models.settlement import Settlement
from splitledger.schemas.settlements import SettlementCreate
from splitledger.services.activity_service import log_activity

logger = logging.getLogger(__name__)

async def add_settlement(db: AsyncSession, group_id: int, data: SettlementCreate):
    group = await get_group_or_404(db, group_id)
    members = await fetch_member_map(db, group_id)

    if data.from_user_id == data.to_user_id:
        raise HTTPException(400, "Cannot settle with yourself")

    payer = members.get(data.from_user_id)
    if not payer:
        raise HTTPException(403, "Payer is not a member of this group")

    receiver = members.get(data.to_user_id)
    if not receiver:
        raise HTTPException(400, "Receiver is not in this group")

    settlement = Settlement(
        group_id=group_id,
        from_user_id=data.from_user_id,
        to_user_id=data.to_user_id,
        amount=data.amount
    )
    db.add(settlement)

    await log_activity(
        db, group_id, group.name, "settlement",
        f"paid {receiver.display_name}", payer.uid, payer.display_name,
    )

    await db.commit()
    await db.refresh(settlement)
    logger.info("Settlement %s: %s paid %s %s", settlement.id, data.from_user_id, data.to_user_id, data.amount)
    return settlement

async def get_settlement_history(db: AsyncSession, group_id: int):
    await get_group_or_404(db, group_id)

    q = select(Settlement).where(
        Settlement.group_id == group_id
    ).order_by(Settlement.settled_at.desc(), Settlement.id.desc())

    result = await db.execute(q)
    return result.scalars().all()

async def undo_settlement(db: AsyncSession, settlement_id: int):
    q = select(Settlement).where(Settlement.id == settlement_id)
    result = await db.execute(q)
    settlement = result.scalar_one_or_none()

    if not settlement:
        raise HTTPException(404, "Settlement entry not found")

    await db.delete(settlement)
    await db.commit()
    logger.info("Settlement %s undone", settlement_id)

    return { "status": "undo successful" }
