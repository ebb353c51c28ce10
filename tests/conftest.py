"""Pytest configuration and shared fixtures for block log tests."""

from pathlib import Path

import pytest

from src.data.blocks.loader import load_blockchain
from src.data.blocks.models import Block, BlockHash, Blockchain


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_block(
    block_hash: str, parent_hash: str, height: int = 1, time: int = 1_600_000_000
) -> Block:
    """Build a transaction-less block for graph tests."""
    return Block(
        block_hash=BlockHash(block_hash),
        parent_hash=BlockHash(parent_hash),
        block_height=height,
        time=time,
    )


@pytest.fixture
def block_log_path() -> Path:
    """Path of the sample ETC block log.

    The log holds a fork at 0xaa01 (children 0xbb02 and 0xcc03), a second
    copy of 0xbb02 with a different height and a block (0xee05) whose
    parent is outside the batch.

    Returns:
        Path: JSON fixture file
    """
    return FIXTURES_DIR / "eth_log.json"


@pytest.fixture
def raw_blockchain(block_log_path: Path) -> Blockchain:
    """Sample block log as decoded, duplicates included."""
    return load_blockchain(block_log_path)


@pytest.fixture
def linear_blocks() -> list[Block]:
    """Four blocks forming a single unforked chain, root first."""
    return [
        make_block("0x01", "0x00", height=1),
        make_block("0x02", "0x01", height=2),
        make_block("0x03", "0x02", height=3),
        make_block("0x04", "0x03", height=4),
    ]


@pytest.fixture
def forked_blocks() -> list[Block]:
    """A(h1, parent h0), B(h2, parent h1), C(h3, parent h1)."""
    return [
        make_block("h1", "h0", height=1),
        make_block("h2", "h1", height=2),
        make_block("h3", "h1", height=2),
    ]


@pytest.fixture
def block_factory():
    """Factory for transaction-less blocks: ``block_factory(hash, parent)``."""
    return make_block
