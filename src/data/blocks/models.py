"""Pydantic models for ETH/ETC block log records."""

from collections.abc import Iterator
from typing import Annotated, NewType

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, RootModel

from src.helpers.parsers import parse_u64

# Identifier types stay distinct so a hash is never passed where an
# address is expected.
BlockHash = NewType("BlockHash", str)
Address = NewType("Address", str)
Height = NewType("Height", int)
Time = NewType("Time", int)

NumericHeight = Annotated[Height, BeforeValidator(parse_u64)]
NumericTime = Annotated[Time, BeforeValidator(parse_u64)]


class TransactionDetail(BaseModel):
    """Subset of the node's transaction object kept for analysis."""

    block_hash: BlockHash = Field(..., alias="blockHash")
    nonce: str
    from_address: Address = Field(..., alias="from")
    # None for contract-creation transactions
    to_address: Address | None = Field(default=None, alias="to")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Transaction(BaseModel):
    """Transaction embedded in a block record."""

    txid: str
    value: float
    details: TransactionDetail

    model_config = ConfigDict(frozen=True)


class Block(BaseModel):
    """Block record. Identity is ``block_hash``."""

    block_hash: BlockHash
    parent_hash: BlockHash
    block_height: NumericHeight
    time: NumericTime
    transactions: tuple[Transaction, ...] = Field(
        default=(), alias="transaction_objects"
    )
    ticker: str | None = None
    transaction_type: str | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Blockchain(RootModel[tuple[Block, ...]]):
    """One ingested batch of blocks, in input order.

    Nothing about height order, parent links or acyclicity is assumed.
    """

    root: tuple[Block, ...] = ()

    model_config = ConfigDict(frozen=True)

    def __iter__(self) -> Iterator[Block]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, item: int) -> Block:
        return self.root[item]

    @property
    def blocks(self) -> tuple[Block, ...]:
        return self.root


__all__ = [
    "Address",
    "Block",
    "BlockHash",
    "Blockchain",
    "Height",
    "Time",
    "Transaction",
    "TransactionDetail",
]
