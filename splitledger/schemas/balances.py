from pydantic import BaseModel
from typing import List

class NetBalance(BaseModel):
    user_id: str
    user_name: str | None
    amount: float

class Settlement(BaseModel):
    from_id: str
    from_name: str | None
    to_id: str
    to_name: str | None
    amount: float

class GroupBalanceOut(BaseModel):
    net: List[NetBalance]
    settlements: List[Settlement]
    is_settled: bool
    unknown_members: List[str] = []
