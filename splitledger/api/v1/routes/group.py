from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from splitledger.db.session import get_db
from splitledger.services.group_services import (
    create_group,
    get_group,
    add_member,
    leave_group,
    delete_group,
    list_group_for_user,
    list_public_groups,
    search_groups,
    send_join_request,
    list_join_requests,
    approve_join_request,
    reject_join_request,
)
from splitledger.schemas.group import GroupCreate, GroupMemberOut, GroupOut, JoinRequestOut, MemberCreate

router = APIRouter()

@router.post("/", response_model=GroupOut, status_code=201)
async def create_new_group(data: GroupCreate, db: AsyncSession = Depends(get_db)):
    return await create_group(db, data)

@router.get("/my-groups", response_model=list[GroupOut])
async def my_groups(uid: str, db: AsyncSession = Depends(get_db)):
    return await list_group_for_user(db, uid)

@router.get("/public", response_model=list[GroupOut])
async def public_groups(db: AsyncSession = Depends(get_db)):
    return await list_public_groups(db)

@router.get("/search", response_model=list[GroupOut])
async def search(q: str, db: AsyncSession = Depends(get_db)):
    return await search_groups(db, q)

@router.get("/{group_id}", response_model=GroupOut)
async def fetch_group(group_id: int, db: AsyncSession = Depends(get_db)):
    return await get_group(db, group_id)

@router.post("/{group_id}/members", response_model=GroupMemberOut, status_code=201)
async def add_user_to_group(group_id: int, data: MemberCreate, db: AsyncSession = Depends(get_db)):
    return await add_member(db, group_id, data)

@router.delete("/{group_id}/members/{uid}")
async def remove_user_from_group(group_id: int, uid: str, db: AsyncSession = Depends(get_db)):
    return await leave_group(db, group_id, uid)

@router.delete("/{group_id}")
async def del_group(group_id: int, db: AsyncSession = Depends(get_db)):
    return await delete_group(db, group_id)

@router.post("/{group_id}/join-requests", response_model=JoinRequestOut, status_code=201)
async def request_to_join(group_id: int, data: MemberCreate, db: AsyncSession = Depends(get_db)):
    return await send_join_request(db, group_id, data)

@router.get("/{group_id}/join-requests", response_model=list[JoinRequestOut])
async def pending_join_requests(group_id: int, db: AsyncSession = Depends(get_db)):
    return await list_join_requests(db, group_id)

@router.post("/{group_id}/join-requests/{uid}/approve", response_model=GroupMemberOut)
async def approve(group_id: int, uid: str, db: AsyncSession = Depends(get_db)):
    return await approve_join_request(db, group_id, uid)

@router.delete("/{group_id}/join-requests/{uid}")
async def reject(group_id: int, uid: str, db: AsyncSession = Depends(get_db)):
    return await reject_join_request(db, group_id, uid)
