"""Reconstruct chain structure from a flat batch of block records.

Edges are implicit: a block points at its parent by hash, and a parent's
children have to be found by matching parent hashes. Everything here is a
pure function of an immutable Blockchain.

Typical pipeline:

    ```python
    from src.analysis.chain import dedup, duplicated_parents, index_by_hash
    from src.data.blocks.loader import load_blockchain

    blockchain = dedup(load_blockchain("eth_log.json"))
    fork_points = duplicated_parents(blockchain)
    block_by_hash = index_by_hash(blockchain)
    ```
"""

from collections import defaultdict

from src.data.blocks.models import Block, BlockHash, Blockchain
from src.helpers.logging import get_logger

logger = get_logger(__name__)


class DuplicateBlockError(ValueError):
    """Raised by a strict index build when a block hash repeats."""


class CycleDetectedError(ValueError):
    """Raised when following children revisits a block hash."""


def dedup(batch: Blockchain) -> Blockchain:
    """Drop repeated block hashes, keeping the first occurrence of each.

    Later records with an already seen hash are dropped even if their other
    fields differ. Relative order of the kept blocks is unchanged.
    """
    seen: set[BlockHash] = set()
    unique: list[Block] = []
    for block in batch:
        if block.block_hash in seen:
            continue
        seen.add(block.block_hash)
        unique.append(block)

    removed = len(batch) - len(unique)
    if removed:
        logger.debug(f"Dropped {removed} duplicate block record(s)")
    return Blockchain(tuple(unique))


def index_by_hash(
    batch: Blockchain, *, strict: bool = False
) -> dict[BlockHash, Block]:
    """Build a block hash -> block lookup table.

    Expects a deduplicated batch. Otherwise the last occurrence of a hash
    overwrites earlier ones (logged as a warning), or, with ``strict``,
    DuplicateBlockError is raised.

    Args:
        batch: Blocks to index
        strict: Fail on a repeated hash instead of overwriting

    Returns:
        Mapping covering every block hash in the batch

    Raises:
        DuplicateBlockError: If ``strict`` and a hash occurs more than once
    """
    block_by_hash: dict[BlockHash, Block] = {}
    for block in batch:
        if block.block_hash in block_by_hash:
            if strict:
                msg = f"Duplicate block hash in batch: {block.block_hash}"
                raise DuplicateBlockError(msg)
            logger.warning(
                f"Block {block.block_hash} appears more than once, "
                "keeping the last occurrence"
            )
        block_by_hash[block.block_hash] = block
    return block_by_hash


def find_block(
    block_by_hash: dict[BlockHash, Block], block_hash: BlockHash
) -> Block | None:
    """Look up a block, returning None for hashes outside the batch."""
    return block_by_hash.get(block_hash)


def parent_hashes(batch: Blockchain) -> list[BlockHash]:
    """Parent hash of every block, in batch order."""
    return [block.parent_hash for block in batch]


def duplicated_parents(batch: Blockchain) -> set[BlockHash]:
    """Find parent hashes claimed by more than one block (fork points).

    Sorting groups equal hashes together, so comparing each value with its
    predecessor finds every hash that occurs at least twice.

    Run on a deduplicated batch: two copies of the same block share a
    parent and would show up as a fork.
    """
    forks: set[BlockHash] = set()
    previous: BlockHash | None = None

    for parent_hash in sorted(parent_hashes(batch)):
        if parent_hash == previous:
            forks.add(parent_hash)
        else:
            previous = parent_hash

    return forks


def children(block: Block, batch: Blockchain) -> list[Block]:
    """Direct children of ``block`` in batch order. Empty for a chain tip."""
    return [b for b in batch if b.parent_hash == block.block_hash]


def chain(block: Block, batch: Blockchain) -> list[Block]:
    """Follow first children from ``block`` down to a chain tip.

    At a fork only the first child in batch order is followed; use
    ``children`` to explore the other branches.

    Raises:
        CycleDetectedError: If the parent links loop back on themselves
    """
    return ChainGraph(batch).chain(block)


class ChainGraph:
    """Hash index plus parent -> children multimap for one batch.

    Built once so traversal costs O(children) per step instead of a scan
    of the whole batch.
    """

    def __init__(self, batch: Blockchain) -> None:
        """Index the batch.

        Args:
            batch: Blocks to index, ideally deduplicated.
        """
        self.batch = batch
        self.block_by_hash = index_by_hash(batch)
        self.children_by_parent: dict[BlockHash, list[Block]] = defaultdict(list)
        for block in batch:
            self.children_by_parent[block.parent_hash].append(block)

    def __len__(self) -> int:
        return len(self.block_by_hash)

    def __contains__(self, block_hash: object) -> bool:
        return block_hash in self.block_by_hash

    def get(self, block_hash: BlockHash) -> Block | None:
        """Block with this hash, or None if it is not in the batch."""
        return find_block(self.block_by_hash, block_hash)

    def children(self, block: Block) -> list[Block]:
        """Direct children of ``block`` in batch order."""
        return list(self.children_by_parent.get(block.block_hash, ()))

    def chain(self, block: Block) -> list[Block]:
        """Follow first children from ``block`` down to a chain tip.

        Returns:
            Blocks from ``block`` to the tip, inclusive

        Raises:
            CycleDetectedError: If a block hash is reached twice
        """
        path = [block]
        visited = {block.block_hash}
        current = block

        while next_blocks := self.children_by_parent.get(current.block_hash):
            current = next_blocks[0]
            if current.block_hash in visited:
                msg = (
                    f"Cycle detected at block {current.block_hash} "
                    f"after {len(path)} block(s)"
                )
                raise CycleDetectedError(msg)
            visited.add(current.block_hash)
            path.append(current)

        return path

    def fork_points(self) -> set[BlockHash]:
        """Parent hashes with more than one child."""
        return {
            parent_hash
            for parent_hash, kids in self.children_by_parent.items()
            if len(kids) > 1
        }

    def roots(self) -> list[Block]:
        """Blocks whose parent is not part of the batch."""
        return [b for b in self.batch if b.parent_hash not in self.block_by_hash]

    def tips(self) -> list[Block]:
        """Blocks without children in the batch."""
        return [b for b in self.batch if b.block_hash not in self.children_by_parent]


__all__ = [
    "ChainGraph",
    "CycleDetectedError",
    "DuplicateBlockError",
    "chain",
    "children",
    "dedup",
    "duplicated_parents",
    "find_block",
    "index_by_hash",
    "parent_hashes",
]
