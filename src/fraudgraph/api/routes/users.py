"""
User API routes.

Creating or updating a user links it to every other user sharing its
email, phone, address or a payment method.
"""

from typing import Any, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fraudgraph.api.deps import UserServiceDep

router = APIRouter()


class UserCreate(BaseModel):
    """Request body for creating or updating a user."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = Field(None, description="User ID; generated when omitted")
    name: Optional[str] = Field(None, description="Display name (required)")
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[dict[str, Any]] = Field(None, description="street, city, country")
    payment_methods: Optional[list[dict[str, Any]]] = Field(
        None, description="type, last4, and provider or bank"
    )
    created_at: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


@router.post("", status_code=201)
async def upsert_user(payload: UserCreate, users: UserServiceDep) -> dict[str, Any]:
    """Create or update a user."""
    return await users.upsert(payload.model_dump(by_alias=True, exclude_none=True))


@router.get("")
async def list_users(
    users: UserServiceDep,
    email: Optional[str] = Query(None, description="Exact email match"),
    phone: Optional[str] = Query(None, description="Exact phone match"),
) -> list[dict[str, Any]]:
    """List users, newest first."""
    return await users.list_users(email=email, phone=phone)


@router.get("/{user_id}")
async def get_user(user_id: str, users: UserServiceDep) -> dict[str, Any]:
    return await users.get(user_id)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, users: UserServiceDep):
    """Delete a user and all of its relationships."""
    await users.delete(user_id)
    return MessageResponse(message="User deleted successfully")
