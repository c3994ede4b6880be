"""Invoke helpers — call sync or async callables uniformly.

Handlers and guards can be ``def`` or ``async def``. Any code that calls
a user-provided callable goes through here so the sync/async check lives
in exactly one place.

``settle()`` goes one step further and folds failures into the return
value. A handler that raises before returning and a handler whose
awaitable raises later both come back as the same ``Failure``, so the
caller has a single branch for errors::

    match await settle(handler, request):
        case Success(value):
            ...
        case Failure(error):
            ...
"""

import inspect
from dataclasses import dataclass
from typing import Any


async def invoke(fn: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *fn* and await the result if it's awaitable."""
    result = fn(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


@dataclass(frozen=True, slots=True)
class Success:
    """A call that produced a value."""

    value: Any


@dataclass(frozen=True, slots=True)
class Failure:
    """A call that raised, synchronously or while being awaited."""

    error: Exception


type Outcome = Success | Failure


async def settle(fn: Any, *args: Any, **kwargs: Any) -> Outcome:
    """Invoke *fn* and capture its result or exception as an ``Outcome``.

    Only ``Exception`` subclasses are captured. Cancellation and other
    ``BaseException`` types propagate untouched.
    """
    try:
        value = await invoke(fn, *args, **kwargs)
    except Exception as exc:
        return Failure(exc)
    return Success(value)
