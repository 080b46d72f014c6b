"""
Transaction API routes.

Creating a transaction links its sender and receiver and connects it to
other transactions made from the same IP address, device or location.
"""

from typing import Any, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fraudgraph.api.deps import TransactionServiceDep
from fraudgraph.api.routes.users import MessageResponse

router = APIRouter()


class TransactionCreate(BaseModel):
    """Request body for creating or updating a transaction."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = Field(None, description="Transaction ID; generated when omitted")
    amount: Optional[float] = Field(None, description="Positive amount (required)")
    currency: Optional[str] = Field(None, description="Defaults to USD")
    timestamp: Optional[str] = Field(None, description="ISO-8601; defaults to now")
    status: Optional[str] = Field(None, description="Defaults to completed")
    from_user_id: Optional[str] = Field(None, description="Sender user ID")
    to_user_id: Optional[str] = Field(None, description="Receiver user ID")
    ip_address: Optional[str] = None
    device_id: Optional[str] = None
    location: Optional[dict[str, Any]] = None
    description: Optional[str] = None
    created_at: Optional[str] = None


@router.post("", status_code=201)
async def upsert_transaction(
    payload: TransactionCreate,
    transactions: TransactionServiceDep,
) -> dict[str, Any]:
    """Create or update a transaction."""
    return await transactions.upsert(payload.model_dump(by_alias=True, exclude_none=True))


@router.get("")
async def list_transactions(
    transactions: TransactionServiceDep,
    status: Optional[str] = Query(None, description="Exact status match"),
    min_amount: Optional[float] = Query(None, alias="minAmount", description="Minimum amount"),
    max_amount: Optional[float] = Query(None, alias="maxAmount", description="Maximum amount"),
    currency: Optional[str] = Query(None, description="Exact currency match"),
) -> list[dict[str, Any]]:
    """List transactions, newest first."""
    return await transactions.list_transactions(
        status=status,
        min_amount=min_amount,
        max_amount=max_amount,
        currency=currency,
    )


@router.get("/{transaction_id}")
async def get_transaction(
    transaction_id: str,
    transactions: TransactionServiceDep,
) -> dict[str, Any]:
    return await transactions.get(transaction_id)


@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(transaction_id: str, transactions: TransactionServiceDep):
    """Delete a transaction and all of its relationships."""
    await transactions.delete(transaction_id)
    return MessageResponse(message="Transaction deleted successfully")
