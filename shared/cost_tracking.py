"""
Cost tracking utilities.

Track remote API costs per flow session.
"""

import asyncio
from decimal import Decimal
from typing import Dict, List, Tuple
from uuid import UUID

from shared.errors import ValidationError
from shared.logging import get_logger

logger = get_logger("cost_tracking")


class CostTracker:
    """In-memory cost ledger keyed by session."""

    def __init__(self):
        """Initialize cost tracker."""
        # Locks per session_id for concurrent-safe operations
        self._locks: Dict[UUID, asyncio.Lock] = {}
        self._lock_manager = asyncio.Lock()  # Lock for managing the locks dict
        self._entries: Dict[UUID, List[Tuple[str, str, Decimal]]] = {}

    async def _get_lock(self, session_id: UUID) -> asyncio.Lock:
        """Get or create lock for a session_id."""
        async with self._lock_manager:
            if session_id not in self._locks:
                self._locks[session_id] = asyncio.Lock()
            return self._locks[session_id]

    async def track_cost(
        self,
        session_id: UUID,
        stage_name: str,
        api_name: str,
        cost: Decimal
    ) -> Decimal:
        """
        Track a cost for a session.

        Args:
            session_id: Flow session ID
            stage_name: Pipeline stage name (e.g. "rendering")
            api_name: Model or API name
            cost: Cost in USD

        Returns:
            New running total for the session

        Raises:
            ValidationError: If cost is negative
        """
        if cost < 0:
            raise ValidationError(f"Cost cannot be negative: {cost}", session_id=session_id)

        lock = await self._get_lock(session_id)
        async with lock:
            self._entries.setdefault(session_id, []).append((stage_name, api_name, cost))
            total = sum((c for _, _, c in self._entries[session_id]), Decimal("0.00"))

        logger.info(
            f"Tracked cost for session {session_id}",
            extra={
                "session_id": str(session_id),
                "stage_name": stage_name,
                "api_name": api_name,
                "cost": float(cost),
                "total": float(total),
            }
        )
        return total

    async def get_total_cost(self, session_id: UUID) -> Decimal:
        """Get total cost for a session (0.00 when nothing was tracked)."""
        if session_id not in self._entries:
            return Decimal("0.00")
        lock = await self._get_lock(session_id)
        async with lock:
            return sum(
                (c for _, _, c in self._entries.get(session_id, [])),
                Decimal("0.00"),
            )

    def discard(self, session_id: UUID) -> Decimal:
        """
        Forget a session's ledger and lock.

        Synchronous so restart() can call it; the ledger is only touched on the
        event loop thread.

        Returns:
            The total that was recorded for the session
        """
        entries = self._entries.pop(session_id, [])
        self._locks.pop(session_id, None)
        return sum((c for _, _, c in entries), Decimal("0.00"))

    def __len__(self) -> int:
        """Number of sessions with a ledger."""
        return len(self._entries)


# Singleton instance
cost_tracker = CostTracker()
