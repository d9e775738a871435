import logging
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.core.balances import calculate_balances, get_simplified_debts
from splitledger.core.dependencies import fetch_member_map, get_group_or_404
from splitledger.models.expense import Expense
from splitledger.models.settlement import Settlement
from splitledger.schemas.balances import GroupBalanceOut, NetBalance, Settlement as SettlementOut

logger = logging.getLogger(__name__)

async def get_group_balances(db: AsyncSession, group_id: int) -> GroupBalanceOut:
    await get_group_or_404(db, group_id)

    # one snapshot of the group's history
    members = await fetch_member_map(db, group_id)
    expenses = (await db.scalars(select(Expense).where(Expense.group_id == group_id))).all()
    settlements = (await db.scalars(select(Settlement).where(Settlement.group_id == group_id))).all()

    balances = calculate_balances(expenses, settlements, members.values())
    debts = get_simplified_debts(balances)

    unknown = [uid for uid in balances if uid not in members]
    if unknown:
        logger.warning("Group %s has balances for non-members: %s", group_id, unknown)

    def name_of(uid):
        member = members.get(uid)
        return member.display_name if member else None

    return GroupBalanceOut(
        net=[
            NetBalance(user_id=uid, user_name=name_of(uid), amount=float(amount))
            for uid, amount in balances.items()
        ],
        settlements=[
            SettlementOut(
                from_id=d.from_user,
                from_name=name_of(d.from_user),
                to_id=d.to_user,
                to_name=name_of(d.to_user),
                amount=float(d.amount),
            )
            for d in debts
        ],
        # settled exactly when nothing is left to transfer
        is_settled=not debts,
        unknown_members=unknown,
    )
