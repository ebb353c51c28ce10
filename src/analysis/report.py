"""Human readable output for blocks, transactions and fork points."""

from collections.abc import Iterable, Sequence

from rich.console import Console
from rich.table import Table

from src.analysis.chain import ChainGraph
from src.data.blocks.models import Block, BlockHash, Transaction

CONTRACT_CREATION = "contract creation"


def format_height(height: int) -> str:
    """Group digits with commas, e.g. 10939864 -> '10,939,864'."""
    return f"{height:,}"


def format_block(block: Block) -> str:
    """One-line block summary: '<height> - <block_hash>'."""
    return f"{format_height(block.block_height)} - {block.block_hash}"


def format_transaction(transaction: Transaction) -> str:
    """One-line transaction summary: 'from: <from>, to: <to>, <value>'."""
    details = transaction.details
    to_address = details.to_address or CONTRACT_CREATION
    return f"from: {details.from_address}, to: {to_address}, {transaction.value}"


def print_chain_summary(
    name: str, blocks: Sequence[Block], console: Console | None = None
) -> None:
    """Print length and end points of a followed chain.

    Args:
        name: Heading for the summary
        blocks: Blocks from root to tip
        console: Rich console instance (optional)
    """
    console = console or Console()
    console.print(name)
    console.print(f"Length:      {format_height(len(blocks))}")
    if blocks:
        console.print(f"First block: {format_block(blocks[0])}")
        console.print(f"Last block:  {format_block(blocks[-1])}")
    console.print()


def print_transactions(block: Block, console: Console | None = None) -> None:
    """Print every transaction of a block, one per line."""
    console = console or Console()
    for transaction in block.transactions:
        console.print(format_transaction(transaction))


def display_fork_table(
    graph: ChainGraph,
    fork_points: Iterable[BlockHash],
    console: Console | None = None,
) -> None:
    """Display fork points and their competing children in a table.

    Args:
        graph: Indexed batch the fork points were found in
        fork_points: Parent hashes claimed by more than one block
        console: Rich console instance (optional)
    """
    console = console or Console()
    fork_points = sorted(fork_points)

    if not fork_points:
        console.print("[green]✓ No fork points detected[/green]")
        return

    table = Table(title="Fork Points")
    table.add_column("Parent", style="cyan")
    table.add_column("Parent Height", justify="right", style="yellow")
    table.add_column("Children", justify="right", style="magenta")
    table.add_column("Child Blocks", style="red")

    for parent_hash in fork_points:
        parent = graph.get(parent_hash)
        kids = graph.children_by_parent.get(parent_hash, [])
        table.add_row(
            parent_hash,
            format_height(parent.block_height) if parent else "not in batch",
            f"{len(kids):,}",
            "\n".join(format_block(kid) for kid in kids),
        )

    console.print(table)


__all__ = [
    "CONTRACT_CREATION",
    "display_fork_table",
    "format_block",
    "format_height",
    "format_transaction",
    "print_chain_summary",
    "print_transactions",
]
