from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import SessionLocal
from app.economy.spin.errors import SpinStorageUnavailableError

T = TypeVar("T")

logger = structlog.get_logger(__name__)


# lock_not_available (lock_timeout) and query_canceled (statement_timeout)
TRANSIENT_SQLSTATES = frozenset({"55P03", "57014"})


def _sqlstate(exc: DBAPIError) -> str | None:
    return getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)


def _is_transient(exc: DBAPIError) -> bool:
    if isinstance(exc, IntegrityError):
        return False
    return exc.connection_invalidated or _sqlstate(exc) in TRANSIENT_SQLSTATES


async def run_spin_transaction(
    operation: Callable[[AsyncSession], Awaitable[T]],
    *,
    timeout_seconds: float | None = None,
    op_name: str = "spin",
) -> T:
    """Runs ``operation`` inside one committed-or-rolled-back transaction.

    Timeouts and connection/lock failures become ``SpinStorageUnavailableError``.
    Cancelling the transaction rolls it back, so callers may retry the whole call.
    The timeout covers ``operation`` only. The commit is left to the database
    timeouts, so a committed redemption is never reported as a timeout.
    Domain errors raised by ``operation`` propagate unchanged.
    """
    timeout = timeout_seconds or get_settings().spin_transaction_timeout_seconds

    try:
        async with SessionLocal.begin() as session:
            result = await asyncio.wait_for(operation(session), timeout=timeout)
        return result
    except asyncio.TimeoutError as exc:
        logger.warning("spin_storage_unavailable", op=op_name, reason="timeout", timeout=timeout)
        raise SpinStorageUnavailableError(f"{op_name} timed out after {timeout}s") from exc
    except (OperationalError, PoolTimeoutError, OSError) as exc:
        logger.warning("spin_storage_unavailable", op=op_name, reason=type(exc).__name__)
        raise SpinStorageUnavailableError(f"{op_name} could not reach storage") from exc
    except DBAPIError as exc:
        if not _is_transient(exc):
            raise
        logger.warning("spin_storage_unavailable", op=op_name, reason=type(exc).__name__)
        raise SpinStorageUnavailableError(f"{op_name} aborted by storage") from exc
