"""Tests for block and transaction output formatting."""

import pytest
from rich.console import Console

from src.analysis.chain import ChainGraph, dedup, duplicated_parents
from src.analysis.report import (
    display_fork_table,
    format_block,
    format_height,
    format_transaction,
    print_chain_summary,
    print_transactions,
)
from src.data.blocks.models import Blockchain


@pytest.fixture
def console() -> Console:
    """Recording console wide enough to keep hashes on one line."""
    return Console(record=True, width=200, color_system=None)


class TestFormatting:
    """Tests for one-line summaries."""

    @pytest.mark.parametrize(
        ("height", "expected"),
        [(0, "0"), (999, "999"), (1000, "1,000"), (10939864, "10,939,864")],
    )
    def test_format_height(self, height: int, expected: str) -> None:
        """Test comma digit grouping."""
        assert format_height(height) == expected

    def test_format_block(self, raw_blockchain: Blockchain) -> None:
        """Test '<height> - <hash>' block lines."""
        assert format_block(raw_blockchain[0]) == "10,939,864 - 0xaa01"

    def test_format_transaction(self, raw_blockchain: Blockchain) -> None:
        """Test 'from: .., to: .., value' transaction lines."""
        txn = raw_blockchain[0].transactions[0]

        assert format_transaction(txn) == (
            "from: 0x7cdd8e80a3336503ad3f2829ffa2bba36ca97fb4, "
            "to: 0xa6e1b726ef41e7d18df6858e9f4ed76012fc2c2e, "
            "0.3030407960113858"
        )

    def test_format_contract_creation(self, raw_blockchain: Blockchain) -> None:
        """Test that a missing recipient is rendered, not an error."""
        txn = raw_blockchain[2].transactions[0]

        assert format_transaction(txn) == (
            "from: 0x1f9840a85d5af5bf1d1762f925bdaddc4201f984, "
            "to: contract creation, 0.0"
        )


class TestConsoleOutput:
    """Tests for rich console reports."""

    def test_print_chain_summary(
        self, raw_blockchain: Blockchain, console: Console
    ) -> None:
        """Test length and end points of a chain summary."""
        blocks = list(raw_blockchain)[:4]

        print_chain_summary("Main chain", blocks, console)
        output = console.export_text()

        assert "Main chain" in output
        assert "Length:      4" in output
        assert "First block: 10,939,864 - 0xaa01" in output
        assert "Last block:  10,939,866 - 0xdd04" in output

    def test_print_empty_chain_summary(self, console: Console) -> None:
        """Test that an empty chain prints without block lines."""
        print_chain_summary("Nothing", [], console)
        output = console.export_text()

        assert "Length:      0" in output
        assert "First block" not in output

    def test_print_transactions(
        self, raw_blockchain: Blockchain, console: Console
    ) -> None:
        """Test one line per transaction."""
        print_transactions(raw_blockchain[-1], console)
        lines = console.export_text().strip().splitlines()

        assert len(lines) == 2
        assert lines[0].endswith(", 3.152")
        assert lines[1].endswith(", 0.25")

    def test_display_fork_table(
        self, raw_blockchain: Blockchain, console: Console
    ) -> None:
        """Test that fork parents and their children are listed."""
        blockchain = dedup(raw_blockchain)
        graph = ChainGraph(blockchain)

        display_fork_table(graph, duplicated_parents(blockchain), console)
        output = console.export_text()

        assert "Fork Points" in output
        assert "0xaa01" in output
        assert "10,939,865 - 0xbb02" in output
        assert "10,939,865 - 0xcc03" in output

    def test_display_fork_table_parent_outside_batch(
        self, block_factory, console: Console
    ) -> None:
        """Test a fork whose parent block was not ingested."""
        batch = Blockchain([block_factory("a", "p"), block_factory("b", "p")])

        display_fork_table(ChainGraph(batch), {"p"}, console)

        assert "not in batch" in console.export_text()

    def test_display_no_forks(self, linear_blocks, console: Console) -> None:
        """Test the message shown when nothing forked."""
        display_fork_table(ChainGraph(Blockchain(linear_blocks)), set(), console)

        assert "No fork points detected" in console.export_text()
