"""Request lifecycle controller — drives every remote call through pending → fulfilled | rejected.

Each dispatch receives a correlation token from its store. Data mutations of
every successful completion are applied in the order the calls resolve, but
only the completion holding the store's latest token writes
``request_phase``/``message``/``error``. Older completions land silently, so
two overlapping updates cannot clobber each other's flags.

No retry, backoff or timeout is applied here; a call that never resolves
leaves its store Pending.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from flowtap.application.schemas.envelope import NormalizedResponse, PaginationSchema
from flowtap.application.services.entity_store import EntityStore
from flowtap.application.services.mutation_rules import MutationRule
from flowtap.application.services.response_normalizer import (
    DEFAULT_SUCCESS_MESSAGE,
    normalize_failure,
    normalize_success,
)
from flowtap.domain.entities import RequestPhase
from flowtap.infrastructure.logging.colored_logger import LifecycleLogger, LifecycleStage

_log = LifecycleLogger(__name__)


@dataclass
class Operation:
    """One remote call plus the rule that folds its result into a store."""

    name: str  # e.g. "customers/fetchAll"
    call: Callable[[], Awaitable[Any]]
    rule: MutationRule
    default_message: str = DEFAULT_SUCCESS_MESSAGE
    read_only: bool = False
    fallback_pagination: PaginationSchema | None = None


@dataclass
class OperationResult:
    """Settled outcome of an operation, returned instead of raising."""

    operation: str
    token: int
    phase: RequestPhase
    applied: bool  # True when this completion wrote the store's flags
    data: Any = None
    message: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.phase is RequestPhase.FULFILLED


class RequestLifecycleController:
    """Runs operations against entity stores. Faults are stored, never raised."""

    async def run(self, store: EntityStore, operation: Operation) -> OperationResult:
        token = store.dispatch_request()
        _log.stage(LifecycleStage.PENDING, operation.name, token=token, in_flight=store.in_flight)
        started = time.perf_counter()

        try:
            body = await operation.call()
            normalized = normalize_success(
                body,
                default_message=operation.default_message,
                fallback_pagination=operation.fallback_pagination,
            )
            return self._fulfill(store, operation, token, normalized, started)
        except asyncio.CancelledError:
            store.abandon_request(token)
            raise
        except Exception as exc:
            error = normalize_failure(exc)
            return self._reject(store, operation, token, error, started)

    def _fulfill(
        self,
        store: EntityStore,
        operation: Operation,
        token: int,
        normalized: NormalizedResponse,
        started: float,
    ) -> OperationResult:
        latest = store.is_latest(token)
        store.release_request(token)
        message: str | None = None

        with store.transaction() as draft:
            before = store.state.content()
            operation.rule(draft, normalized)
            draft.in_flight = max(0, draft.in_flight - 1)
            if latest:
                unchanged = draft.content() == before
                message = None if operation.read_only and unchanged else normalized.message
                draft.fulfill(message)

        elapsed = f"{time.perf_counter() - started:.2f}s"
        if latest:
            _log.stage(LifecycleStage.FULFILLED, operation.name, token=token, elapsed=elapsed)
            if message is None:
                _log.detail("Read left the store unchanged; no message", operation=operation.name)
        else:
            _log.stage(LifecycleStage.STALE, operation.name, token=token, elapsed=elapsed)

        return OperationResult(
            operation=operation.name,
            token=token,
            phase=RequestPhase.FULFILLED,
            applied=latest,
            data=normalized.data,
            message=message if latest else normalized.message,
        )

    def _reject(
        self,
        store: EntityStore,
        operation: Operation,
        token: int,
        error: str,
        started: float,
    ) -> OperationResult:
        latest = store.is_latest(token)
        store.release_request(token)

        with store.transaction() as draft:
            draft.in_flight = max(0, draft.in_flight - 1)
            if latest:
                draft.reject(error)

        elapsed = f"{time.perf_counter() - started:.2f}s"
        if latest:
            _log.stage(LifecycleStage.REJECTED, operation.name, token=token, error=error, elapsed=elapsed)
        else:
            _log.stage(LifecycleStage.STALE, operation.name, token=token, error=error, elapsed=elapsed)

        return OperationResult(
            operation=operation.name,
            token=token,
            phase=RequestPhase.REJECTED,
            applied=latest,
            error=error,
        )
