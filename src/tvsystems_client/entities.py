# Node response entities for the TV Systems API

from __future__ import annotations
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .parser import parse_transaction
from .transactions import Transaction


class Balance(BaseModel):
    """Balance of an address."""
    address: str
    confirmations: Optional[int] = None
    balance: int

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class BalanceDetail(BaseModel):
    """Balance broken down by availability."""
    address: str
    regular: Optional[int] = None
    minting_average: Optional[int] = Field(None, alias="mintingAverage")
    available: Optional[int] = None
    effective: Optional[int] = None
    height: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class SposConsensus(BaseModel):
    """Block minting data."""
    mint_time: Optional[int] = Field(None, alias="mintTime")
    mint_balance: Optional[int] = Field(None, alias="mintBalance")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Block(BaseModel):
    """Block with its transactions decoded into typed variants."""
    version: Optional[int] = None
    timestamp: Optional[int] = None
    reference: Optional[str] = None
    spos_consensus: Optional[SposConsensus] = Field(None, alias="SPOSConsensus")
    transaction_merkle_root: Optional[str] = Field(None, alias="TransactionMerkleRoot")
    transactions: List[Transaction] = Field(default_factory=list)
    generator: Optional[str] = None
    signature: Optional[str] = None
    fee: Optional[int] = None
    blocksize: Optional[int] = None
    height: Optional[int] = None
    transaction_count: Optional[int] = Field(None, alias="transaction count")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("transactions", mode="before")
    @classmethod
    def _decode_transactions(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [item if isinstance(item, Transaction) else parse_transaction(item) for item in value]
        return value
