from splitledger.db.session import engine
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.models.group import Group
from splitledger.models.expense import Expense
from splitledger.models.settlement import Settlement

async def check_db_service():
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
        return {"db": True, "message":"Database is connected"}
    except Exception as e:
        return {"db": False, "error": str(e)}
    
async def system_health():
    return {
        "status": "ok"
    }

async def system_metrics(db: AsyncSession):
    groups_q = select(func.count(Group.id)).where(
        Group.is_deleted == False
    )
    expenses_q = select(func.count(Expense.id))
    settlements_q = select(func.count(Settlement.id))

    groups_res = await db.execute(groups_q)
    expenses_res = await db.execute(expenses_q)
    settlements_res = await db.execute(settlements_q)

    return {
        "groups": groups_res.scalar(),
        "expenses": expenses_res.scalar(),
        "settlements": settlements_res.scalar()
    }
