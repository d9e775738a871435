import logging
from fastapi import HTTPException
from sqlalchemy import delete, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from splitledger.core.dependencies import get_group_or_404
from splitledger.models.expense import Expense, ExpenseSplit
from splitledger.models.group import Group
from splitledger.models.group_member import GroupMember
from splitledger.models.join_request import JoinRequest
from splitledger.models.activity import Activity
from splitledger.models.settlement import Settlement
from splitledger.schemas.group import GroupCreate, MemberCreate
from splitledger.services.activity_service import log_activity

logger = logging.getLogger(__name__)

async def create_group(db: AsyncSession, data: GroupCreate):
    group = Group(
        name=data.name,
        description=data.description,
        is_public=data.is_public,
        created_by=data.creator.uid,
    )
    db.add(group)
    await db.flush()

    member = GroupMember(
        group_id=group.id,
        uid=data.creator.uid,
        display_name=data.creator.display_name,
        email=data.creator.email,
        role="admin",
    )
    db.add(member)

    await log_activity(
        db, group.id, group.name, "group_created",
        f"created group {group.name}", data.creator.uid, data.creator.display_name,
    )

    await db.commit()
    logger.info("Group %s created by %s", group.id, data.creator.uid)
    return await get_group_or_404(db, group.id)

async def get_group(db: AsyncSession, group_id: int):
    return await get_group_or_404(db, group_id)

async def add_member(db: AsyncSession, group_id: int, data: MemberCreate):
    group = await get_group_or_404(db, group_id)

    q = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.uid == data.uid
    )
    if await db.scalar(q):
        raise HTTPException(409, "User is already a member of this group")

    member = GroupMember(
        group_id=group_id,
        uid=data.uid,
        display_name=data.display_name,
        email=data.email,
        role="member",
    )
    db.add(member)

    await log_activity(
        db, group_id, group.name, "member_joined",
        f"joined {group.name}", data.uid, data.display_name,
    )

    await db.commit()
    await db.refresh(member)
    logger.info("%s joined group %s", data.uid, group_id)
    return member

async def leave_group(db: AsyncSession, group_id: int, uid: str):
    await get_group_or_404(db, group_id)

    q = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.uid == uid
    )
    member = await db.scalar(q)
    if not member:
        raise HTTPException(404, "Member not found in this group")

    # expenses and settlements stay, their balance shows up as an unknown member
    await db.delete(member)
    await db.commit()
    logger.info("%s left group %s", uid, group_id)
    return {"status": "left"}

async def delete_group(db: AsyncSession, group_id: int):
    group = await get_group_or_404(db, group_id)

    expense_ids = select(Expense.id).where(Expense.group_id == group_id)
    await db.execute(delete(ExpenseSplit).where(ExpenseSplit.expense_id.in_(expense_ids)))
    await db.execute(delete(Expense).where(Expense.group_id == group_id))
    await db.execute(delete(Settlement).where(Settlement.group_id == group_id))
    await db.execute(delete(Activity).where(Activity.group_id == group_id))
    await db.execute(delete(JoinRequest).where(JoinRequest.group_id == group_id))

    group.is_deleted = True
    await db.commit()
    logger.info("Group %s deleted", group_id)
    return {"status": "deleted"}

async def list_group_for_user(db: AsyncSession, uid: str):
    q = (
        select(Group)
        .join(GroupMember)
        .where(GroupMember.uid == uid, Group.is_deleted == False)
        .order_by(Group.id)
    )
    result = await db.execute(q)
    return result.scalars().all()

async def list_public_groups(db: AsyncSession):
    q = (
        select(Group)
        .where(Group.is_public == True, Group.is_deleted == False)
        .order_by(Group.id)
    )
    result = await db.execute(q)
    return result.scalars().all()

async def search_groups(db: AsyncSession, query_text: str):
    escaped = query_text.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    q = (
        select(Group)
        .where(
            Group.is_public == True,
            Group.is_deleted == False,
            or_(
                func.lower(Group.name).like(pattern, escape="\\"),
                func.lower(Group.description).like(pattern, escape="\\"),
            ),
        )
        .order_by(Group.id)
    )
    result = await db.execute(q)
    return result.scalars().all()

async def _get_join_request(db: AsyncSession, group_id: int, uid: str) -> JoinRequest | None:
    q = select(JoinRequest).where(
        JoinRequest.group_id == group_id,
        JoinRequest.uid == uid
    )
    return await db.scalar(q)

async def send_join_request(db: AsyncSession, group_id: int, data: MemberCreate):
    await get_group_or_404(db, group_id)

    q = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.uid == data.uid
    )
    if await db.scalar(q):
        raise HTTPException(409, "User is already a member of this group")

    # asking twice keeps the first request
    existing = await _get_join_request(db, group_id, data.uid)
    if existing:
        return existing

    request = JoinRequest(
        group_id=group_id,
        uid=data.uid,
        display_name=data.display_name,
        email=data.email,
    )
    db.add(request)
    await db.commit()
    await db.refresh(request)
    logger.info("%s asked to join group %s", data.uid, group_id)
    return request

async def list_join_requests(db: AsyncSession, group_id: int):
    await get_group_or_404(db, group_id)

    q = (
        select(JoinRequest)
        .where(JoinRequest.group_id == group_id)
        .order_by(JoinRequest.requested_at, JoinRequest.id)
    )
    result = await db.execute(q)
    return result.scalars().all()

async def approve_join_request(db: AsyncSession, group_id: int, uid: str):
    group = await get_group_or_404(db, group_id)

    request = await _get_join_request(db, group_id, uid)
    if not request:
        raise HTTPException(404, "Join request not found")

    q = select(GroupMember).where(
        GroupMember.group_id == group_id,
        GroupMember.uid == uid
    )
    if await db.scalar(q):
        raise HTTPException(409, "User is already a member of this group")

    member = GroupMember(
        group_id=group_id,
        uid=request.uid,
        display_name=request.display_name,
        email=request.email,
        role="member",
    )
    db.add(member)
    await db.delete(request)

    await log_activity(
        db, group_id, group.name, "member_joined",
        "joined the group", request.uid, request.display_name,
    )

    await db.commit()
    await db.refresh(member)
    logger.info("Join request of %s approved for group %s", uid, group_id)
    return member

async def reject_join_request(db: AsyncSession, group_id: int, uid: str):
    await get_group_or_404(db, group_id)

    request = await _get_join_request(db, group_id, uid)
    if not request:
        raise HTTPException(404, "Join request not found")

    await db.delete(request)
    await db.commit()
    logger.info("Join request of %s rejected for group %s", uid, group_id)
    return {"status": "rejected"}
