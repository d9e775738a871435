from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.models.group import Group
from splitledger.models.group_member import GroupMember

async def get_group_or_404(db: AsyncSession, group_id: int) -> Group:
    q_group = (
        select(Group)
        .where(Group.id == group_id, Group.is_deleted == False)
        .execution_options(populate_existing=True)
    )
    res_group = await db.execute(q_group)
    group = res_group.scalar_one_or_none()

    if not group:
        raise HTTPException(404, "Group does not exist")

    return group

async def fetch_member_map(db: AsyncSession, group_id: int) -> dict[str, GroupMember]:
    q = select(GroupMember).where(GroupMember.group_id == group_id).order_by(GroupMember.id)
    res = await db.execute(q)
    return {m.uid: m for m in res.scalars().all()}
