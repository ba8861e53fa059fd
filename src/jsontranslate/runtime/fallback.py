"""Per-record fallback toggle with guarded scoped overrides.

FallbackState is tri-state: None (unset, behaves as allowed), True or False.
Only an explicit False suppresses fallback chains.

Scoped overrides save the current state, apply the new one for the body and
restore the saved state on every exit path, so nested scopes unwind to the
exact prior value even when a body raises.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from contextlib import AbstractContextManager, contextmanager

__all__ = ["FallbackToggle"]


class FallbackToggle:
    """Instance-scoped fallback flag.

    Not thread-safe: callers serialize access per record.

    Example:
        >>> toggle = FallbackToggle()
        >>> toggle.allowed
        True
        >>> with toggle.disabled():
        ...     toggle.allowed
        False
        >>> toggle.state is None
        True
        >>> toggle.disable_fallback()  # persistent
        >>> toggle.state
        False
    """

    __slots__ = ("_state",)

    def __init__(self, state: bool | None = None) -> None:
        """Initialize toggle.

        Args:
            state: Initial FallbackState (default: unset)
        """
        self._state = state

    @property
    def state(self) -> bool | None:
        """Current FallbackState: None (unset), True or False."""
        return self._state

    @property
    def allowed(self) -> bool:
        """Whether fallback chains may be walked."""
        return self._state is not False

    def enable_fallback[T](self, body: Callable[[], T] | None = None) -> T | None:
        """Enable fallback persistently, or only while body runs.

        Args:
            body: Callable run with fallback enabled; state restored afterwards

        Returns:
            The body's result, or None without a body
        """
        return self._toggle(True, body)

    def disable_fallback[T](self, body: Callable[[], T] | None = None) -> T | None:
        """Disable fallback persistently, or only while body runs.

        Args:
            body: Callable run with fallback disabled; state restored afterwards

        Returns:
            The body's result, or None without a body
        """
        return self._toggle(False, body)

    @contextmanager
    def scoped(self, enabled: bool) -> Generator[FallbackToggle]:
        """Apply a state for the duration of a with-block.

        Args:
            enabled: State to apply inside the block

        Yields:
            This toggle
        """
        previous = self._state
        self._state = enabled
        try:
            yield self
        finally:
            self._state = previous

    def enabled(self) -> AbstractContextManager[FallbackToggle]:
        """Context manager enabling fallback for a with-block."""
        return self.scoped(True)

    def disabled(self) -> AbstractContextManager[FallbackToggle]:
        """Context manager disabling fallback for a with-block."""
        return self.scoped(False)

    def _toggle[T](self, enabled: bool, body: Callable[[], T] | None) -> T | None:
        if body is None:
            self._state = enabled
            return None
        with self.scoped(enabled):
            return body()

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"FallbackToggle(state={self._state!r})"
