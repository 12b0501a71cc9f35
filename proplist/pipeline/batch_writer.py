"""Sequential, chunked bulk writes to the property store."""

import asyncio
import logging
from typing import Awaitable, Callable, Sequence, TypeVar

from proplist.exceptions import StoreWriteError
from proplist.models import Property
from proplist.store.base import PropertyStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

ProgressCallback = Callable[[float], None]


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split ``items`` into consecutive lists of at most ``size``."""
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


class BatchWriter:
    """Write records chunk by chunk, one record at a time.

    Chunks never overlap and a pause separates consecutive chunks. The first
    rejected record aborts the run; records written before it stay written.

    Parameters
    ----------
    store : PropertyStore
        Destination store.
    batch_size : int
        Records per chunk.
    delay_seconds : float
        Pause between chunks (not after the last one).
    sleep : Callable[[float], Awaitable[None]]
        Coroutine used for the pause.
    """

    def __init__(
        self,
        store: PropertyStore,
        batch_size: int = 5,
        delay_seconds: float = 0.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.store = store
        self.batch_size = batch_size
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    async def write(
        self,
        records: Sequence[Property],
        on_progress: ProgressCallback | None = None,
    ) -> list[str]:
        """Persist ``records`` in order.

        Parameters
        ----------
        records : Sequence[Property]
            Records to add.
        on_progress : ProgressCallback | None
            Called after each chunk with the percentage of chunks done.

        Returns
        -------
        list[str]
            Ids assigned by the store, in input order.

        Raises
        ------
        StoreWriteError
            If the store rejects a record. ``position`` is 1-based over the
            whole input.
        """
        chunks = chunked(records, self.batch_size)
        total = len(chunks)
        ids: list[str] = []
        logger.info("Writing %d properties in %d chunks of up to %d", len(records), total, self.batch_size)

        for chunk_index, chunk in enumerate(chunks):
            logger.debug("Processing chunk %d of %d", chunk_index + 1, total, extra={"chunk": chunk_index + 1})
            for offset, record in enumerate(chunk):
                position = chunk_index * self.batch_size + offset + 1
                try:
                    ids.append(await self.store.add(record))
                except Exception as exc:
                    logger.error("Failed to add property %d: %s", position, exc, extra={"position": position})
                    raise StoreWriteError(position, str(exc) or type(exc).__name__) from exc

            progress = (chunk_index + 1) / total * 100
            if on_progress is not None:
                on_progress(progress)
            logger.info(
                "Chunk %d/%d written (%.0f%%)",
                chunk_index + 1,
                total,
                progress,
                extra={"chunk": chunk_index + 1},
            )

            if chunk_index < total - 1:
                await self._sleep(self.delay_seconds)

        return ids
