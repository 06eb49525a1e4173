"""Cooperative cancellation shared by a single run."""

import threading

from wfiv.exceptions import Canceled


class CancelToken:
    """Flag observed by long-running steps of a run.

    Example:
        token = CancelToken()
        token.cancel()
        token.raise_if_cancelled()  # raises Canceled
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation was requested."""
        return self._event.is_set()

    def raise_if_cancelled(self, processed: int = 0, pending: int = 0) -> None:
        """Raise Canceled if cancellation was requested.

        Args:
            processed: Families already rendered in the run
            pending: Families not yet rendered

        Raises:
            Canceled: If the token was cancelled
        """
        if self._event.is_set():
            raise Canceled(processed, pending)
