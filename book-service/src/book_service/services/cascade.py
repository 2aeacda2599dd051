"""
Favourites cascade delivery.

Deleting a book leaves references to it in users' favourites, which live in
the user_service. `books.delete_book` records a `CascadeIntent` in the same
transaction as the deletion; this module delivers those intents:

1. Right after the delete response, as a FastAPI background task
2. Periodically, from a sweep task started with the application, which picks
   up intents whose earlier attempts failed or were interrupted

Failed attempts are retried with exponential backoff until
`CASCADE_MAX_ATTEMPTS`, after which the intent is marked failed and logged.
Redelivery is safe because the remote removal is idempotent.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..clients.user_service_client import UserServiceClient, get_user_service_client
from ..config import settings
from ..crud import cascade_intents as intents_crud
from ..db import get_session_factory
from ..logging_config import logger
from ..models.book import CascadeIntent, CascadeStatus


class CascadeDispatcher:
    """Delivers pending favourites cascades to the user_service."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        user_client: UserServiceClient,
        max_attempts: int = 8,
        retry_base_seconds: float = 2.0,
        retry_max_seconds: float = 300.0,
    ):
        self.session_factory = session_factory
        self.user_client = user_client
        self.max_attempts = max_attempts
        self.retry_base_seconds = retry_base_seconds
        self.retry_max_seconds = retry_max_seconds

    def backoff_delay(self, attempts: int) -> timedelta:
        """Delay before the next attempt after `attempts` failed ones."""
        seconds = self.retry_base_seconds * (2 ** max(attempts - 1, 0))
        return timedelta(seconds=min(seconds, self.retry_max_seconds))

    async def deliver(
        self, db: AsyncSession, intent: CascadeIntent, now: Optional[datetime] = None
    ) -> bool:
        """
        Make one delivery attempt and record its outcome on the intent.

        Returns:
            True if this attempt delivered the intent. An intent that another
            dispatch settled in the meantime is left unchanged.
        """
        now = now or datetime.now(timezone.utc)
        result = await self.user_client.remove_book_from_favourites(intent.book_id)

        if result.ok:
            if not await intents_crud.mark_delivered(db, intent, now):
                logger.info(f"Cascade for book {intent.book_id} was already settled")
                return False
            logger.info(f"Cascade for book {intent.book_id} delivered")
            return True

        error = result.error.message
        attempts = intent.attempts + 1
        if attempts >= self.max_attempts:
            if not await intents_crud.mark_failed(db, intent, error):
                logger.info(f"Cascade for book {intent.book_id} was already settled")
                return False
            logger.error(
                f"Cascade for book {intent.book_id} abandoned after {attempts} attempts: {error}"
            )
            return False

        delay = self.backoff_delay(attempts)
        if not await intents_crud.mark_retry(db, intent, error, now + delay):
            logger.info(f"Cascade for book {intent.book_id} was already settled")
            return False
        logger.warning(
            f"Cascade for book {intent.book_id} failed (attempt {attempts}/"
            f"{self.max_attempts}): {error}. Retrying in {delay.total_seconds():.0f}s"
        )
        return False

    async def dispatch_intent(self, intent_id: UUID) -> bool:
        """Deliver one intent immediately, if it is still pending."""
        async with self.session_factory() as db:
            intent = await intents_crud.get_intent(db, intent_id)
            if intent is None or intent.status != CascadeStatus.PENDING.value:
                return False
            return await self.deliver(db, intent)

    async def dispatch_pending(self, now: Optional[datetime] = None) -> int:
        """
        Attempt every intent that is due.

        Returns:
            Number of intents delivered
        """
        now = now or datetime.now(timezone.utc)
        delivered = 0
        async with self.session_factory() as db:
            for intent in await intents_crud.list_due_intents(db, now):
                if await self.deliver(db, intent, now):
                    delivered += 1
        return delivered

    async def run_forever(self, interval_seconds: float) -> None:
        """Sweep for due intents every `interval_seconds` until cancelled."""
        logger.info(f"Cascade sweep started (every {interval_seconds}s)")
        while True:
            try:
                delivered = await self.dispatch_pending()
                if delivered:
                    logger.info(f"Cascade sweep delivered {delivered} intent(s)")
            except Exception as e:
                # Keep sweeping; the intents stay pending in the database.
                logger.error(f"Cascade sweep failed: {e}", exc_info=True)
            await asyncio.sleep(interval_seconds)


def get_cascade_dispatcher() -> CascadeDispatcher:
    """
    FastAPI dependency for obtaining a CascadeDispatcher instance.

    Returns:
        CascadeDispatcher configured from the service settings
    """
    return CascadeDispatcher(
        session_factory=get_session_factory(),
        user_client=get_user_service_client(),
        max_attempts=settings.CASCADE_MAX_ATTEMPTS,
        retry_base_seconds=settings.CASCADE_RETRY_BASE_SECONDS,
        retry_max_seconds=settings.CASCADE_RETRY_MAX_SECONDS,
    )
