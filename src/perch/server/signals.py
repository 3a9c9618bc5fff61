"""Termination signal handling.

Two channels can end the serve loop: SIGINT everywhere, and SIGTERM
where the platform delivers POSIX signals. Whichever fires first wins.
The receiver stays installed until the server has drained, so any
further signals are absorbed instead of interrupting the drain.
"""

import asyncio
import contextlib
import logging
import os
import signal
from collections.abc import AsyncIterator, Iterator

import anyio

from perch.errors import SignalError

logger = logging.getLogger("perch.server")


def shutdown_signals() -> tuple[signal.Signals, ...]:
    """The signals that trigger graceful shutdown on this platform."""
    if os.name == "posix":
        return (signal.SIGINT, signal.SIGTERM)
    return (signal.SIGINT,)


@contextlib.contextmanager
def receive_shutdown_signals() -> Iterator[AsyncIterator[signal.Signals]]:
    """Install handlers for the shutdown signals for the duration of the block.

    Must be entered from the main thread while an event loop is running.

    Raises:
        SignalError: If the handlers cannot be installed.
    """
    if os.name != "posix":
        with _interrupt_receiver() as signals:
            yield signals
        return

    with contextlib.ExitStack() as stack:
        try:
            signals = stack.enter_context(anyio.open_signal_receiver(*shutdown_signals()))
        except (NotImplementedError, RuntimeError, ValueError, OSError) as exc:
            msg = f"Failed to install signal handlers: {exc}"
            raise SignalError(msg) from exc
        yield signals


@contextlib.contextmanager
def _interrupt_receiver() -> Iterator[AsyncIterator[signal.Signals]]:
    """SIGINT-only receiver for platforms without loop signal handlers."""
    loop = asyncio.get_running_loop()
    received: asyncio.Queue[signal.Signals] = asyncio.Queue()

    def on_signal(signum: int, frame: object) -> None:
        loop.call_soon_threadsafe(received.put_nowait, signal.Signals(signum))

    try:
        previous = signal.signal(signal.SIGINT, on_signal)
    except (ValueError, OSError) as exc:
        msg = f"Failed to install Ctrl+C handler: {exc}"
        raise SignalError(msg) from exc

    async def iterate() -> AsyncIterator[signal.Signals]:
        while True:
            yield await received.get()

    try:
        yield iterate()
    finally:
        signal.signal(signal.SIGINT, previous)


async def wait_for_shutdown_signal(signals: AsyncIterator[signal.Signals]) -> signal.Signals:
    """Block until the first shutdown signal arrives and return it."""
    async for signum in signals:
        logger.info("Received %s, starting graceful shutdown", signum.name)
        return signum
    msg = "Signal receiver closed before any signal arrived."
    raise SignalError(msg)
