"""
LivDaily Backend — Shared Service Helpers
===========================================

What:  The ownership check, database-error translation and race-safe lazy
       row creation that the user-scoped services rely on.

Ownership rule:
    A record is loaded by primary key first, then its user_id is compared
    with the caller's:
        missing row         → NotFoundError  (404)
        someone else's row  → ForbiddenError (403)
    Listing queries never need this check because they always filter on
    user_id = caller.

Error Handling Strategy:
    Application exceptions (LivDailyError subclasses) propagate unchanged.
    Anything else raised inside a service call is logged with its traceback
    and re-raised as DatabaseError, so the client only ever sees a generic 500.
"""

import functools
import logging
import uuid
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, Generic, Iterable, Optional, Tuple, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.exceptions import DatabaseError, ForbiddenError, LivDailyError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def translate_db_errors(action: str) -> Callable[[F], F]:
    """
    Decorator for async service methods.

    Example:
        @translate_db_errors("list journal entries")
        async def list_entries(self, db, user_id): ...
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except LivDailyError:
                raise
            except Exception as e:
                logger.error("Failed to %s: %s", action, str(e), exc_info=True)
                raise DatabaseError(
                    message=f"Could not {action}. Please try again.",
                    context={"error_type": type(e).__name__},
                )
        return wrapper  # type: ignore[return-value]
    return decorator


def day_start(value: date) -> datetime:
    """Midnight UTC at the start of `value`."""
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def day_end_exclusive(value: date) -> datetime:
    """Midnight UTC at the start of the day after `value`."""
    return day_start(value + timedelta(days=1))


class OwnedRecordService(Generic[ModelT]):
    """
    Base for services whose model has a `user_id` column.

    Subclasses set `model` and `resource` (used in 404 messages) and may list
    `required_fields` that an update must never null out.
    """

    model: Type[ModelT]
    resource: str = "record"
    required_fields: Iterable[str] = ()

    async def get_owned(
        self, db: AsyncSession, user_id: uuid.UUID, record_id: uuid.UUID
    ) -> ModelT:
        record = await db.get(self.model, record_id)
        if record is None:
            raise NotFoundError(resource=self.resource, resource_id=str(record_id))
        if record.user_id != user_id:
            logger.warning(
                "User %s attempted to access %s %s owned by another user",
                user_id, self.resource, record_id,
            )
            raise ForbiddenError(
                message=f"You do not have permission to modify this {self.resource}",
                context={"resource": self.resource, "resource_id": str(record_id)},
            )
        return record

    def apply_changes(self, record: ModelT, changes: Dict[str, Any]) -> ModelT:
        """Copies sent fields onto the record, skipping explicit nulls for required columns."""
        for field, value in changes.items():
            if value is None and field in self.required_fields:
                continue
            setattr(record, field, value)
        return record

    async def delete_owned(
        self, db: AsyncSession, user_id: uuid.UUID, record_id: uuid.UUID
    ) -> None:
        record = await self.get_owned(db, user_id, record_id)
        await db.delete(record)
        await db.flush()
        logger.info("Deleted %s %s for user %s", self.resource, record_id, user_id)


def optional_range(
    start: Optional[date], end: Optional[date]
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Converts an inclusive [start, end] date range into UTC datetime bounds."""
    return (
        day_start(start) if start else None,
        day_end_exclusive(end) if end else None,
    )


async def get_or_create_for_user(
    db: AsyncSession, model: Type[ModelT], user_id: uuid.UUID, **defaults: Any
) -> Tuple[ModelT, bool]:
    """
    Load the single row a user owns in `model` (UNIQUE user_id), inserting it
    with `defaults` when absent.

    The insert runs inside a savepoint. If a concurrent request inserted the
    row first, the UNIQUE violation rolls back only the savepoint and the
    winner's row is returned.

    Returns:
        (record, created)
    """
    query = select(model).where(model.user_id == user_id)
    record = (await db.execute(query)).scalar_one_or_none()
    if record is not None:
        return record, False

    record = model(user_id=user_id, **defaults)
    try:
        async with db.begin_nested():
            db.add(record)
            await db.flush()
    except IntegrityError:
        logger.info("Concurrent create of %s for user %s; reloading", model.__name__, user_id)
        return (await db.execute(query)).scalar_one(), False
    return record, True
