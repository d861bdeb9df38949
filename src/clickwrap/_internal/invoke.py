"""Call sync or async handlers uniformly.

Site handlers can be ``def`` or ``async def``; the gate decorator and the
dispatcher both go through ``invoke()`` so the check lives in one place.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
