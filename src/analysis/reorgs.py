"""Scan a block log batch for competing history (reorgs).

Loads the batch, drops duplicate block records, finds parent hashes that
more than one block builds on and reports how many were found.

Usage:
    python -m src.analysis.reorgs [path/to/eth_log.json]
"""

import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict
from rich.console import Console

from src.analysis.chain import ChainGraph, dedup, duplicated_parents, index_by_hash
from src.analysis.report import display_fork_table
from src.data.blocks.loader import DecodeError, load_blockchain
from src.data.blocks.models import Block, BlockHash, Blockchain
from src.helpers.logging import get_logger

logger = get_logger(__name__)


class ReorgScan(BaseModel):
    """Results of scanning one batch."""

    blockchain: Blockchain
    fork_points: frozenset[BlockHash]
    index: dict[BlockHash, Block]
    duplicates_removed: int

    model_config = ConfigDict(frozen=True)

    @property
    def reorg_count(self) -> int:
        return len(self.fork_points)


class ReorgScanner:
    """Detect fork points in a block log."""

    def __init__(
        self,
        path: str | Path | None = None,
        console: Console | None = None,
        *,
        show_forks: bool = True,
    ) -> None:
        """Initialize scanner.

        Args:
            path: Block log to read (default: BLOCK_LOG_PATH setting)
            console: Rich console for output (optional)
            show_forks: Whether to print the fork point table
        """
        self.path = path
        self.console = console or Console()
        self.show_forks = show_forks

    def scan(self, raw: Blockchain) -> ReorgScan:
        """Deduplicate a decoded batch and find its fork points."""
        blockchain = dedup(raw)
        fork_points = duplicated_parents(blockchain)
        block_by_hash = index_by_hash(blockchain)

        logger.debug(
            f"Indexed {len(block_by_hash):,} unique blocks, "
            f"{len(fork_points)} fork point(s)"
        )

        return ReorgScan(
            blockchain=blockchain,
            fork_points=frozenset(fork_points),
            index=block_by_hash,
            duplicates_removed=len(raw) - len(blockchain),
        )

    def run(self) -> ReorgScan:
        """Load the batch, scan it and print the reorg count."""
        result = self.scan(load_blockchain(self.path))

        if result.duplicates_removed:
            logger.info(
                f"Removed {result.duplicates_removed:,} duplicate block record(s)"
            )

        self.console.print(
            f"Number of duplicate Parent references (reorgs): {result.reorg_count}\n"
        )
        if self.show_forks and result.fork_points:
            display_fork_table(
                ChainGraph(result.blockchain), result.fork_points, self.console
            )

        return result


def main() -> None:
    """Main entry point."""
    path = sys.argv[1] if len(sys.argv) > 1 else None

    try:
        ReorgScanner(path).run()
    except FileNotFoundError as e:
        logger.error(f"Block log not found: {e.filename}")
        sys.exit(1)
    except DecodeError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
