import logging
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.core.balances import expense_share, qround
from splitledger.models.expense import Expense, ExpenseSplit
from splitledger.models.user_budget import UserBudget
from splitledger.schemas.user import BudgetOut, MonthlySpendOut

logger = logging.getLogger(__name__)

def start_of_month(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

def _as_utc(dt: datetime) -> datetime:
    # sqlite hands back naive UTC timestamps
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)

async def update_monthly_budget(db: AsyncSession, uid: str, amount: Decimal) -> BudgetOut:
    budget = await db.get(UserBudget, uid)

    if budget:
        budget.monthly_budget = amount
    else:
        budget = UserBudget(uid=uid, monthly_budget=amount)
        db.add(budget)

    await db.commit()
    logger.info("Monthly budget of %s set to %s", uid, amount)
    return BudgetOut(uid=uid, monthly_budget=float(amount))

async def get_user_budget(db: AsyncSession, uid: str) -> Decimal | None:
    budget = await db.get(UserBudget, uid)
    return budget.monthly_budget if budget else None

async def get_user_monthly_expenses(db: AsyncSession, uid: str, now: datetime | None = None) -> Decimal:
    """Sum of the user's shares in expenses created since the first of the month (UTC)."""
    since = start_of_month(now)

    q = (
        select(Expense)
        .join(ExpenseSplit, ExpenseSplit.expense_id == Expense.id)
        .where(ExpenseSplit.member_uid == uid)
        .distinct()
    )
    expenses = (await db.scalars(q)).all()

    total = Decimal("0")
    for exp in expenses:
        if exp.created_at is not None and _as_utc(exp.created_at) >= since:
            total += expense_share(exp)

    return total

async def get_monthly_summary(db: AsyncSession, uid: str) -> MonthlySpendOut:
    since = start_of_month()
    total = qround(await get_user_monthly_expenses(db, uid))
    budget = await get_user_budget(db, uid)

    return MonthlySpendOut(
        uid=uid,
        month_start=since,
        total=float(total),
        monthly_budget=float(budget) if budget is not None else None,
        remaining=float(budget - total) if budget is not None else None,
    )
