"""Cancellation tokens for in-flight requests.

A :class:`CancellationToken` wraps a setup function. Every call to
:meth:`CancellationToken.get_signal` creates a new controller/signal pair and
hands the controller to the setup function, which arms whatever trigger
should cancel the request later (a timer, a UI callback, another task).
The request pipeline races the transport against the signal.

Example:
    >>> token = CancellationToken.with_timeout(2.5)
    >>> await client.get("/slow", config={"cancellation_token": token})
"""

import asyncio
from collections.abc import Callable
from typing import Any

from hookhttp.core.logging import get_logger
from hookhttp.exceptions import RequestAborted


logger = get_logger(__name__)


class CancellationSignal:
    """One-shot interrupt channel observed by the request pipeline."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: Any = None
        self._timers: list[asyncio.TimerHandle] = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Any:
        return self._reason

    async def wait(self) -> None:
        """Block until the signal fires."""
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise RequestAborted(self._reason)

    def release(self) -> None:
        """Drop pending timers once the request no longer needs the signal."""
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()

    def _fire(self, reason: Any) -> None:
        self._reason = reason
        self._event.set()


class CancellationController:
    """Issues the cancellation of its paired signal."""

    def __init__(self) -> None:
        self._signal = CancellationSignal()

    @property
    def signal(self) -> CancellationSignal:
        return self._signal

    def cancel(self, reason: Any = None) -> None:
        """Fire the signal. Calls after the first one are ignored."""
        if self._signal.cancelled:
            return
        logger.debug("cancellation_requested", reason=reason)
        self._signal._fire(reason)

    def cancel_after(self, seconds: float, reason: Any = None) -> None:
        """Schedule :meth:`cancel` on the running loop.

        The timer is dropped when the signal is released, so a request that
        finishes in time never fires it.
        """
        loop = asyncio.get_running_loop()
        self._signal._timers.append(loop.call_later(seconds, self.cancel, reason))


SetupFunction = Callable[[CancellationController], None]


class CancellationToken:
    """Produces independent cancellation signals on demand.

    The token is stateless apart from the setup function, so one token can
    be reused across any number of requests.
    """

    def __init__(self, setup: SetupFunction) -> None:
        self.setup = setup

    def get_signal(self) -> CancellationSignal:
        controller = CancellationController()
        self.setup(controller)
        return controller.signal

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        """Token whose signals fire ``seconds`` after they are created.

        The signal must be requested from inside a running event loop, which
        is always the case for signals resolved by the request pipeline.
        """
        if seconds <= 0:
            raise ValueError("seconds must be > 0")

        def _arm(controller: CancellationController) -> None:
            controller.cancel_after(seconds, f"timeout after {seconds}s")

        return cls(_arm)
