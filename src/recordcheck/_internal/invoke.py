"""Run rule predicates that may be sync or async.

``custom`` receives the field's value and ``skip`` receives the whole
record. Either may be a plain function, an ``async def``, or a callable
that returns an awaitable::

    rules = {
        "username": {"custom": lambda value: value.isalnum()},
        "invite": {"custom": invite_code_exists},  # async def
        "company": {"skip": lambda record: record.get("kind") == "person"},
    }

The engine always goes through ``invoke`` so a predicate's answer is
resolved before the next check for that field runs.
"""

import inspect
from typing import Any


async def invoke(predicate: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *predicate* and return its answer, awaiting it if needed.

    The answer is returned as-is; callers test its truthiness.
    """
    answer = predicate(*args, **kwargs)
    if inspect.isawaitable(answer):
        return await answer
    return answer
