"""Pydantic schemas for the transactions domain."""

from pydantic import BaseModel, Field

from packages.ledger_parser.models import Currency, TransactionKind


class TransactionCreate(BaseModel):
    """A transaction submitted by the chat bridge or any other client.

    ``amount`` is in ``currency`` units; the API converts it to VND.
    """

    user_id: str = Field(..., min_length=1)
    type: TransactionKind
    amount: float = Field(..., gt=0)
    note: str = ""
    currency: Currency = Currency.VND
    category: str = ""


class TransactionOut(BaseModel):
    id: int | None = None
    user_id: str
    type: str
    amount: float
    original_amount: float
    note: str = ""
    category: str = ""
    currency: str = "VND"


class CreateResponse(BaseModel):
    status: str = "ok"
    transaction: TransactionOut | None = None
