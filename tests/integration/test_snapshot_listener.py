"""Integration tests for SnapshotListener live subscriptions"""

import asyncio
import pytest
from datetime import datetime
from decimal import Decimal
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from revenue_ledger.adapter.services.snapshot_listener import SnapshotListener
from revenue_ledger.app.repositories.ledger_entry_repository import LedgerEntryFilter
from revenue_ledger.domain.ledger_entry import EntryType, LedgerEntry, Party
from revenue_ledger.domain.settlement import Settlement


async def next_snapshot(queue: asyncio.Queue):
    return await asyncio.wait_for(queue.get(), timeout=5)


@pytest.mark.asyncio
class TestSnapshotListener:

    async def test_delivers_initial_and_changed_snapshots(self, file_engine):
        """
        Given: A subscription to vendor entries
        When: A vendor entry and then a team entry are inserted
        Then: The initial empty snapshot and the vendor change are delivered only
        """
        # Arrange
        factory = sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
        listener = SnapshotListener(factory, poll_interval=0.05)
        snapshots = asyncio.Queue()
        unsubscribe = listener.subscribe(LedgerEntryFilter(party=Party.VENDOR), snapshots.put_nowait)

        try:
            # Act / Assert
            assert await next_snapshot(snapshots) == []

            async with factory() as session:
                session.add(
                    LedgerEntry(
                        id="v1",
                        type=EntryType.CREDIT,
                        party=Party.VENDOR,
                        amount=Decimal("10.00"),
                        currency="USD",
                    )
                )
                await session.commit()

            snapshot = await next_snapshot(snapshots)
            assert [e.id for e in snapshot] == ["v1"]

            async with factory() as session:
                session.add(
                    LedgerEntry(
                        type=EntryType.CREDIT,
                        party=Party.TEAM,
                        amount=Decimal("30.00"),
                        currency="USD",
                    )
                )
                await session.commit()

            await asyncio.sleep(0.3)
            assert snapshots.empty()
        finally:
            unsubscribe()
            await listener.close()

        assert listener.active_subscriptions == 0

    async def test_settlement_subscription_with_async_callback(self, file_engine):
        factory = sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
        listener = SnapshotListener(factory, poll_interval=0.05)
        snapshots = asyncio.Queue()

        async def on_change(settlements):
            await snapshots.put([s.id for s in settlements])

        listener.subscribe_settlements(on_change, party=Party.VENDOR)
        assert listener.active_subscriptions == 1

        try:
            assert await next_snapshot(snapshots) == []

            async with factory() as session:
                session.add(
                    Settlement(
                        id="s1",
                        party=Party.VENDOR,
                        ledger_entry_ids=["v1"],
                        total_amount=Decimal("10.00"),
                        currency="USD",
                        settlement_date=datetime(2024, 1, 1),
                    )
                )
                await session.commit()

            assert await next_snapshot(snapshots) == ["s1"]
        finally:
            await listener.close()

        assert listener.active_subscriptions == 0
