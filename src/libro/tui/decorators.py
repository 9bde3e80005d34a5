"""
TUI decorators for store calls and loop-dependent handlers.
"""

import logging
from functools import wraps
from typing import Any, Callable

from libro.errors import LibroError

logger = logging.getLogger(__name__)


def persistence_action(prefix: str) -> Callable[[Callable[..., bool]], Callable[..., bool]]:
    """Decorator for controller steps that call the store.

    The wrapped method takes (self, state, ...) and returns True when its
    transition completed. A LibroError is logged and posted to the banner as
    "<prefix>: <error>", and the wrapper returns False so the caller skips
    the transition that would have followed success.
    """

    def decorator(step: Callable[..., bool]) -> Callable[..., bool]:
        @wraps(step)
        def wrapper(self: Any, state: Any, *args: Any, **kwargs: Any) -> bool:
            try:
                return step(self, state, *args, **kwargs)
            except LibroError as e:
                logger.warning("%s: %s", prefix, e)
                state.set_message(f"{prefix}: {e}")
                return False

        return wrapper

    return decorator


def safe_action(action_func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that skips App handlers until the event loop exists."""

    @wraps(action_func)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        if getattr(self, "event_loop", None) is None:
            return None
        return action_func(self, *args, **kwargs)

    return wrapper
