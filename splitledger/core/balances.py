from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, NamedTuple

from splitledger.core.exceptions import InvalidInputError

CENTS = Decimal("0.01")
EPSILON = Decimal("0.01")


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


class Debt(NamedTuple):
    from_user: str
    to_user: str
    amount: Decimal


def expense_share(exp) -> Decimal:
    """Unrounded share owed by each member the expense is split among."""
    if not exp.split_among:
        raise InvalidInputError(f"Expense {getattr(exp, 'id', '?')} has an empty split")

    return Decimal(str(exp.amount)) / len(exp.split_among)


def calculate_balances(expenses: Iterable, settlements: Iterable, members: Iterable) -> Dict[str, Decimal]:
    """
    Net balance per member:

        balance = total_paid - total_share + settlements_paid - settlements_received

    Positive means the group owes the member, negative means the member owes
    the group. Ids seen in expenses or settlements but missing from
    `members` are still tracked.
    """
    balances: Dict[str, Decimal] = {}

    for member in members:
        balances[member.uid] = Decimal("0")

    for exp in expenses:
        share = expense_share(exp)
        amount = Decimal(str(exp.amount))

        # payer fronted the full amount
        balances[exp.paid_by] = balances.get(exp.paid_by, Decimal("0")) + amount

        for uid in exp.split_among:
            balances[uid] = balances.get(uid, Decimal("0")) - share

    for s in settlements:
        amount = Decimal(str(s.amount))
        balances[s.from_user_id] = balances.get(s.from_user_id, Decimal("0")) + amount
        balances[s.to_user_id] = balances.get(s.to_user_id, Decimal("0")) - amount

    return balances


def get_simplified_debts(balances: Dict[str, Decimal]) -> List[Debt]:
    """
    Greedy settle-up: pair the largest debtor with the largest creditor until
    one side runs out.

    Not globally minimal for every debt graph. Each amount is rounded to
    cents on its own, so many transfers can drift from the exact total by a
    few cents.
    """
    creditors = []
    debtors = []

    for uid, bal in balances.items():
        if bal > EPSILON:
            creditors.append([uid, bal])
        elif bal < -EPSILON:
            debtors.append([uid, -bal])

    # sort is stable, equal amounts keep insertion order
    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    debts: List[Debt] = []
    i = 0
    j = 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        amount = min(debtor[1], creditor[1])

        if amount > EPSILON:
            debts.append(Debt(from_user=debtor[0], to_user=creditor[0], amount=qround(amount)))

        debtor[1] -= amount
        creditor[1] -= amount

        if debtor[1] < EPSILON:
            i += 1
        if creditor[1] < EPSILON:
            j += 1

    return debts

