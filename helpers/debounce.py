"""
Trailing-edge debounce for async handlers.

Only the last call inside the quiet window executes. Every caller that was
waiting when it fires receives that call's result.
"""

import asyncio
import inspect
from typing import Any, Callable, List, Optional

from .unified_logger import UnifiedLogger, get_core_logger


class Debouncer:
    """
    Debounce a sync or async callable.

    Usage:
        debounced = Debouncer(validate, delay=0.3, name="form_validation")
        result = await debounced(values)

    A call that raises is logged and resolves every waiter to None.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        delay: float,
        name: Optional[str] = None,
        logger: Optional[UnifiedLogger] = None,
    ):
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self.func = func
        self.delay = delay
        self.name = name or getattr(func, "__name__", "debounced")
        self.logger = logger or get_core_logger("debounce", name=self.name)

        self._timer: Optional[asyncio.Task] = None
        self._waiters: List[asyncio.Future] = []

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def __call__(self, *args, **kwargs) -> Any:
        loop = asyncio.get_running_loop()
        waiter = loop.create_future()
        self._waiters.append(waiter)

        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = loop.create_task(self._fire(args, kwargs))

        return await waiter

    async def _fire(self, args, kwargs) -> None:
        await asyncio.sleep(self.delay)

        # Calls arriving while func runs start a new window.
        self._timer = None
        waiters, self._waiters = self._waiters, []

        result = None
        try:
            result = self.func(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            self.logger.error(f"Debounced call {self.name} failed: {exc}")
            result = None

        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(result)

    def cancel(self) -> None:
        """Drop the pending call; current waiters resolve to None."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(None)
