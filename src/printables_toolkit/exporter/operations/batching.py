"""Split operation lists into batches that respect the remote payload limit."""

from __future__ import annotations

from typing import Sequence

from .models import EditOperation


def chunk_operations(
    operations: Sequence[EditOperation],
    size: int,
) -> list[list[EditOperation]]:
    """
    Split into consecutive batches of at most `size` operations.

    Order is preserved across batches, so applying the batches one after
    another is the same as applying the whole list.

    Raises:
        ValueError: If size is not positive
    """
    if size <= 0:
        raise ValueError(f"Batch size must be positive: {size}")
    return [list(operations[i:i + size]) for i in range(0, len(operations), size)]
