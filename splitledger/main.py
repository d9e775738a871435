import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from splitledger.api.v1.routes.activity import router as activity_router
from splitledger.api.v1.routes.balance import router as balance_router
from splitledger.api.v1.routes.expense import router as expense_router
from splitledger.api.v1.routes.group import router as group_router
from splitledger.api.v1.routes.settlement import router as settlement_router
from splitledger.api.v1.routes.system import router as system_router
from splitledger.api.v1.routes.user import router as user_router
from splitledger.core.exceptions import InvalidInputError
from splitledger.core.logging import setup_logging
from splitledger.db.db_check import create_tables, wait_for_db

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await wait_for_db()
    await create_tables()
    yield

app = FastAPI(title="Splitledger", lifespan=lifespan)

@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    logger.error("Invalid input on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})

@app.get("/")
async def root():
    return {"message": "Splitledger is live"}

app.include_router(system_router, prefix="/api/v1/system")
app.include_router(group_router, prefix="/api/v1/groups")
app.include_router(expense_router, prefix="/api/v1/expenses")
app.include_router(settlement_router, prefix="/api/v1/settlements")
app.include_router(balance_router, prefix="/api/v1/balances")
app.include_router(activity_router, prefix="/api/v1/activities")
app.include_router(user_router, prefix="/api/v1/users")
