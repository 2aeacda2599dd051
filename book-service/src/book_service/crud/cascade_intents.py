"""
Store operations for the favourites cascade outbox.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.book import CascadeIntent, CascadeStatus


async def get_intent(db: AsyncSession, intent_id: UUID) -> Optional[CascadeIntent]:
    result = await db.execute(select(CascadeIntent).where(CascadeIntent.id == intent_id))
    return result.scalar_one_or_none()


async def list_due_intents(
    db: AsyncSession, now: datetime, limit: int = 50
) -> List[CascadeIntent]:
    """Pending intents whose next attempt is due, oldest first."""
    result = await db.execute(
        select(CascadeIntent)
        .where(
            CascadeIntent.status == CascadeStatus.PENDING.value,
            CascadeIntent.next_attempt_at <= now,
        )
        .order_by(CascadeIntent.next_attempt_at, CascadeIntent.id)
        .limit(limit)
    )
    return list(result.scalars().all())


async def _settle_attempt(db: AsyncSession, intent: CascadeIntent, **values) -> bool:
    """
    Record one attempt on a still-pending intent.

    The status check is part of the UPDATE, so an intent already delivered or
    failed by a concurrent dispatch is left as it is.

    Returns:
        True if the intent was pending and has been updated
    """
    result = await db.execute(
        update(CascadeIntent)
        .where(
            CascadeIntent.id == intent.id,
            CascadeIntent.status == CascadeStatus.PENDING.value,
        )
        .values(attempts=CascadeIntent.attempts + 1, **values)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return result.rowcount == 1


async def mark_delivered(db: AsyncSession, intent: CascadeIntent, now: datetime) -> bool:
    return await _settle_attempt(
        db,
        intent,
        status=CascadeStatus.DELIVERED.value,
        delivered_at=now,
        last_error=None,
    )


async def mark_retry(
    db: AsyncSession, intent: CascadeIntent, error: str, next_attempt_at: datetime
) -> bool:
    return await _settle_attempt(
        db, intent, last_error=error, next_attempt_at=next_attempt_at
    )


async def mark_failed(db: AsyncSession, intent: CascadeIntent, error: str) -> bool:
    return await _settle_attempt(
        db, intent, status=CascadeStatus.FAILED.value, last_error=error
    )
