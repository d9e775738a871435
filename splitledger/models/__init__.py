from splitledger.models.group import Group
from splitledger.models.group_member import GroupMember
from splitledger.models.join_request import JoinRequest
from splitledger.models.expense import Expense, ExpenseSplit
from splitledger.models.settlement import Settlement
from splitledger.models.activity import Activity
from splitledger.models.user_budget import UserBudget

__all__ = [
    "Group", "GroupMember", "JoinRequest", "Expense", "ExpenseSplit",
    "Settlement", "Activity", "UserBudget",
]
