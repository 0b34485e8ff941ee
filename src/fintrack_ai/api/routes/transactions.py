import asyncio
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from fintrack_ai.api.dependencies import get_transaction_entries
from fintrack_ai.api.schemas import TransactionCreateRequest
from fintrack_ai.models import Transaction
from fintrack_ai.services.transactions import TransactionEntryService

router = APIRouter(prefix="/transactions")


@router.post("", response_model=Transaction, status_code=201)
async def create_transaction(
    req: TransactionCreateRequest,
    entries: Annotated[TransactionEntryService, Depends(get_transaction_entries)],
) -> Transaction:
    transaction = Transaction(
        user_id=req.user_id,
        account_id=req.account_id,
        type=req.type,
        description=req.description,
        amount=req.amount,
        currency_id=req.currency_id,
        transaction_date=req.transaction_date or date.today(),
    )
    return await asyncio.to_thread(entries.record, transaction)


@router.get("/{transaction_id}", response_model=Transaction)
async def get_transaction(
    transaction_id: int,
    entries: Annotated[TransactionEntryService, Depends(get_transaction_entries)],
) -> Transaction:
    transaction = entries.repository.get(transaction_id)
    if transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.post("/{transaction_id}/recategorize", response_model=Transaction)
async def recategorize_transaction(
    transaction_id: int,
    entries: Annotated[TransactionEntryService, Depends(get_transaction_entries)],
) -> Transaction:
    transaction = await asyncio.to_thread(entries.recategorize, transaction_id)
    if transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction
