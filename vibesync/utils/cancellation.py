"""
Cooperative cancellation for long-running loads.
"""

from asyncio import Event

from .exceptions import CancellationRequested


class CancellationToken:
    """
    Signals an in-flight load to stop before its next network request.
    """

    def __init__(self):
        self._event = Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self):
        """
        Request cancellation. Safe to call more than once.
        """
        self._event.set()

    def raise_if_cancelled(self):
        """
        Raises CancellationRequested if cancellation has been requested.
        """
        if self._event.is_set():
            raise CancellationRequested
