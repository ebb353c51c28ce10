"""Decode block log files into typed Blockchain batches.

The whole batch is rejected on the first malformed record; the analysis code
only ever sees fully decoded blocks.
"""

from pathlib import Path

from pydantic import ValidationError

from src.data.blocks.models import Blockchain
from src.helpers.config import get_block_log_path
from src.helpers.logging import get_logger

logger = get_logger(__name__)


class DecodeError(ValueError):
    """Raised when a block batch cannot be decoded."""


def parse_blockchain(data: str | bytes) -> Blockchain:
    """Decode a JSON array of block records.

    Args:
        data: Raw JSON text of the block log.

    Returns:
        Blockchain with blocks in input order.

    Raises:
        DecodeError: If the JSON is invalid or any record fails validation.
    """
    try:
        return Blockchain.model_validate_json(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        msg = (
            f"Failed to decode block batch ({e.error_count()} error(s)), "
            f"first at {location or '<root>'}: {first['msg']}"
        )
        raise DecodeError(msg) from e


def load_blockchain(path: str | Path | None = None) -> Blockchain:
    """Read and decode a block log file.

    Args:
        path: File to read. Defaults to the BLOCK_LOG_PATH setting.

    Returns:
        Decoded Blockchain.

    Raises:
        FileNotFoundError: If the file does not exist.
        DecodeError: If the file contents are not a valid block batch.
    """
    file_path = Path(path) if path is not None else Path(get_block_log_path())
    logger.debug(f"Reading block log from {file_path}")

    blockchain = parse_blockchain(file_path.read_bytes())

    logger.info(f"Decoded {len(blockchain):,} blocks from {file_path}")
    return blockchain


__all__ = ["DecodeError", "load_blockchain", "parse_blockchain"]
