import logging
from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.core.dependencies import fetch_member_map, get_group_or_404
from splitledger.models.expense import Expense, ExpenseSplit
from splitledger.schemas.expense import ExpenseCreate
from splitledger.services.activity_service import log_activity

logger = logging.getLogger(__name__)

async def create_expense(db: AsyncSession, data: ExpenseCreate, group_id: int):
    group = await get_group_or_404(db, group_id)
    members = await fetch_member_map(db, group_id)

    # -----------------------------------
    # 1. Payer must be in the group
    # -----------------------------------
    payer = members.get(data.paid_by)
    if not payer:
        raise HTTPException(400, "Payer is not a member of the group")

    # -----------------------------------
    # 2. Every split user must be in the group
    # -----------------------------------
    unknown = [uid for uid in data.split_among if uid not in members]
    if unknown:
        raise HTTPException(
            400,
            f"Users not in the group: {', '.join(unknown)}"
        )

    # -----------------------------------
    # 3. Create expense and its ordered splits
    # -----------------------------------
    expense = Expense(
        group_id=group_id,
        description=data.description,
        amount=data.amount,
        paid_by=data.paid_by,
        category=data.category,
        created_by=data.created_by,
        splits=[
            ExpenseSplit(member_uid=uid, position=pos)
            for pos, uid in enumerate(data.split_among)
        ],
    )
    db.add(expense)

    await log_activity(
        db, group_id, group.name, "expense",
        f"added expense: {data.description}", data.created_by, payer.display_name,
    )

    await db.commit()
    await db.refresh(expense)
    logger.info("Expense %s added to group %s (%s paid %s)", expense.id, group_id, data.paid_by, data.amount)
    return expense

async def get_expenses_by_group(db: AsyncSession, group_id: int):
    await get_group_or_404(db, group_id)

    q = (
        select(Expense)
        .where(Expense.group_id == group_id)
        .order_by(Expense.created_at.desc(), Expense.id.desc())
    )
    res = await db.execute(q)
    return res.scalars().all()

async def delete_expense(db: AsyncSession, expense_id: int):
    q = select(Expense).where(Expense.id == expense_id)
    res = await db.execute(q)
    expense = res.scalar_one_or_none()

    if not expense:
        raise HTTPException(404, "Expense not found")

    await db.delete(expense)
    await db.commit()
    logger.info("Expense %s deleted", expense_id)
    return {"status": "deleted"}
