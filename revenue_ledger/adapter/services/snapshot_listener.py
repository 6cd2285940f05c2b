"""Polling snapshot subscriptions

Each subscription is a background task that re-runs its query on an interval
and calls the callback with the full result whenever it differs from the last
delivered snapshot. The first snapshot is always delivered.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional, Set
from sqlmodel.ext.asyncio.session import AsyncSession
from revenue_ledger.adapter.repositories.ledger_entry_repository import SqlAlchemyLedgerEntryRepository
from revenue_ledger.adapter.repositories.settlement_repository import SqlAlchemySettlementRepository
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryFilter
from revenue_ledger.domain.ledger_entry import Party

logger = logging.getLogger(__name__)

Callback = Callable[[List[Any]], Any]
Fetch = Callable[[AsyncSession], Awaitable[List[Any]]]


class SnapshotListener:
    """
    Live query subscriptions over the ledger store

    Usage:
        listener = SnapshotListener(AsyncSessionLocal, poll_interval=2.0)
        unsubscribe = listener.subscribe(LedgerEntryFilter(party=Party.TEAM), on_change)
        ...
        unsubscribe()
    """

    def __init__(self, session_factory: Callable[[], AsyncSession], poll_interval: float = 2.0):
        self.session_factory = session_factory
        self.poll_interval = poll_interval
        self._tasks: Set[asyncio.Task] = set()

    def subscribe(self, filters: Optional[LedgerEntryFilter], callback: Callback) -> Callable[[], None]:
        """Subscribe to ledger entries matching ``filters`` (newest first)"""
        filters = filters or LedgerEntryFilter()

        async def fetch(session: AsyncSession) -> List[Any]:
            return await SqlAlchemyLedgerEntryRepository(session).list(filters)

        return self._start(fetch, callback)

    def subscribe_settlements(
        self,
        callback: Callback,
        party: Optional[Party] = None,
    ) -> Callable[[], None]:
        """Subscribe to settlements, optionally of one party (newest first)"""

        async def fetch(session: AsyncSession) -> List[Any]:
            return await SqlAlchemySettlementRepository(session).list(party=party)

        return self._start(fetch, callback)

    async def close(self):
        """Cancel every active subscription"""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    @property
    def active_subscriptions(self) -> int:
        return len(self._tasks)

    def _start(self, fetch: Fetch, callback: Callback) -> Callable[[], None]:
        task = asyncio.get_running_loop().create_task(self._poll(fetch, callback))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        def unsubscribe():
            task.cancel()

        return unsubscribe

    async def _poll(self, fetch: Fetch, callback: Callback):
        last_snapshot = None

        while True:
            try:
                async with self.session_factory() as session:
                    items = await fetch(session)

                snapshot = [item.model_dump() for item in items]
                if snapshot != last_snapshot:
                    last_snapshot = snapshot
                    result = callback(items)
                    if inspect.isawaitable(result):
                        await result

            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Snapshot subscription poll failed: {e}")

            await asyncio.sleep(self.poll_interval)
