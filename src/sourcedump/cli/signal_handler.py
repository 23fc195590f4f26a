"""Interrupt tracking for the sourcedump CLI.

SIGINT (Ctrl+C) and, on Unix-like systems, SIGPIPE (reader of a pipe went away)
are recorded rather than acted on immediately, so the writer can stop at a chunk
boundary and the CLI can exit with the conventional status code.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Callable, Dict, Optional

EXIT_SIGINT = 130
EXIT_SIGPIPE = 141


class InterruptMonitor:
    """Records SIGINT and SIGPIPE deliveries.

    Each handler fires once: after recording the signal it restores whatever
    handler was installed before, so a second Ctrl+C behaves as usual.

    Attributes:
        sigpipe_received: Set when SIGPIPE has been delivered.
        sigint_received: Set when SIGINT has been delivered.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self._previous_handlers: Dict[int, Any] = {}

    def _recorder(self, event: Event) -> Callable[[int, Optional[FrameType]], None]:
        def record(signum: int, frame: Optional[FrameType]) -> None:
            event.set()
            signal.signal(signum, self._previous_handlers.get(signum, signal.SIG_DFL))

        return record

    def install(self) -> None:
        """Install handlers for SIGINT and, where the platform has it, SIGPIPE."""
        watched = [(signal.SIGINT, self.sigint_received)]
        sigpipe = getattr(signal, "SIGPIPE", None)
        if sigpipe is not None:
            watched.append((sigpipe, self.sigpipe_received))

        for signum, event in watched:
            self._previous_handlers[signum] = signal.getsignal(signum)
            signal.signal(signum, self._recorder(event))

    @property
    def interrupted(self) -> bool:
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def exit_code(self) -> Optional[int]:
        """Exit status implied by the recorded signals, or None if none arrived."""
        if self.sigpipe_received.is_set():
            return EXIT_SIGPIPE
        if self.sigint_received.is_set():
            return EXIT_SIGINT
        return None


# Shared instance for the application
interrupt_monitor = InterruptMonitor()


def setup_signal_handling() -> None:
    interrupt_monitor.install()


def cleanup() -> None:
    """Point stdout at the null device after an interruption.

    This keeps the interpreter from printing a second broken-pipe error while it
    flushes stdout during shutdown.
    """
    if interrupt_monitor.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
