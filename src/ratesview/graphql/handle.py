"""Observable handle for a single query execution."""

import asyncio
from collections.abc import Callable, Coroutine, Generator
from typing import Any

from ratesview.core.logging import get_logger
from ratesview.models.base import QueryStatus
from ratesview.models.query import Operation
from ratesview.models.state import QueryState

Subscriber = Callable[[QueryState], None]

logger = get_logger("query_handle")

_ALLOWED = {
    QueryStatus.IDLE: {QueryStatus.LOADING},
    QueryStatus.LOADING: {QueryStatus.SUCCESS, QueryStatus.FAILED},
    QueryStatus.SUCCESS: set(),
    QueryStatus.FAILED: set(),
}


class QueryHandle:
    """Live state of one query execution.

    Transitions run IDLE -> LOADING -> SUCCESS | FAILED, each at most once.
    Subscribers get the current state on subscription and every later
    transition. Dropping the last subscriber while the request is in flight
    cancels it.
    """

    def __init__(self, operation: Operation, state: QueryState | None = None) -> None:
        self.operation = operation
        self._state = state or QueryState.idle()
        self._subscribers: list[Subscriber] = []
        self._task: asyncio.Task[None] | None = None
        self._cancelled = False
        self._finished = asyncio.Event()
        if self._state.done:
            self._finished.set()

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def done(self) -> bool:
        return self._state.done

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(
        self,
        fetch: Coroutine[Any, Any, None],
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Move to LOADING and schedule ``fetch`` on ``loop`` (default: the running loop)."""
        loop = loop or asyncio.get_running_loop()
        self.transition(QueryState.pending())
        self._task = loop.create_task(fetch)

    def transition(self, state: QueryState) -> bool:
        """Apply a state change and notify subscribers.

        Returns False when the change is not allowed from the current state
        or the handle was cancelled.
        """
        if self._cancelled or state.status not in _ALLOWED[self._state.status]:
            logger.debug(
                "query_transition_ignored",
                operation=self.operation.query.operation_name,
                current=self._state.status.value,
                requested=state.status.value,
            )
            return False

        self._state = state
        if state.done:
            self._finished.set()
        for subscriber in list(self._subscribers):
            self._notify(subscriber, state)
        return True

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register ``subscriber`` and replay the current state to it.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(subscriber)
        self._notify(subscriber, self._state)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)
                if not self._subscribers:
                    self.cancel()

        return unsubscribe

    def cancel(self) -> bool:
        """Abandon an in-flight request. No-op once a terminal state is reached."""
        if self.done or self._cancelled or self._task is None:
            return False
        self._cancelled = True
        self._task.cancel()
        self._finished.set()
        logger.debug("query_cancelled", operation=self.operation.query.operation_name)
        return True

    async def result(self) -> QueryState:
        """Wait for the terminal state."""
        await self._finished.wait()
        if self._cancelled:
            raise asyncio.CancelledError("query was cancelled")
        return self._state

    def __await__(self) -> Generator[Any, None, QueryState]:
        return self.result().__await__()

    def _notify(self, subscriber: Subscriber, state: QueryState) -> None:
        try:
            subscriber(state)
        except Exception:
            logger.exception(
                "query_subscriber_failed",
                operation=self.operation.query.operation_name,
                status=state.status.value,
            )
