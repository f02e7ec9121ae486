#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Bridge from suspend/resume sequences to a single settled outcome.

A suspend/resume sequence is a generator that ``yield``s awaitables. The driver
awaits each yielded item and sends its value back into the generator. A failure is
thrown back into the generator at the suspension point, so the sequence can handle
it; if it does not, it becomes the failure of the whole sequence.

Usage:
    def create_user(ctx):
        user = yield ctx.db.insert({"name": "bob"})
        yield ctx.fixtures.create_app_modules(["users"])
        return user

    user = await await_async(create_user, ctx)
    await must_throw(failing_sequence, "boom")
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Generator, Mapping
import functools
import inspect
import re
from typing import Any

from attrs import define
from provide.foundation.logger import get_logger

from appharness.errors import MustThrowError

log = get_logger(__name__)

Suspendable = Generator[Any, Any, Any] | Awaitable[Any] | Callable[..., Any]


@define(frozen=True)
class Outcome:
    """Settled result of a bridged computation: a value or an error, never both."""

    value: Any = None
    error: BaseException | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


async def _resolve_yielded(value: Any) -> Any:
    if inspect.isgenerator(value):
        return await _drive(value)
    if inspect.isawaitable(value):
        return await value
    if isinstance(value, list | tuple):
        results = await asyncio.gather(*(_resolve_yielded(item) for item in value))
        if hasattr(value, "_fields"):
            return type(value)(*results)
        return type(value)(results)
    if isinstance(value, Mapping):
        keys = list(value.keys())
        results = await asyncio.gather(*(_resolve_yielded(value[key]) for key in keys))
        return dict(zip(keys, results, strict=True))
    raise TypeError(
        f"Suspend/resume sequences may only yield awaitables, generators, lists or mappings, "
        f"got {type(value).__name__}"
    )


async def _drive(generator: Generator[Any, Any, Any]) -> Any:
    send_value: Any = None
    pending_error: BaseException | None = None
    try:
        while True:
            try:
                if pending_error is not None:
                    error, pending_error = pending_error, None
                    yielded = generator.throw(error)
                else:
                    yielded = generator.send(send_value)
            except StopIteration as stop:
                return stop.value

            try:
                send_value = await _resolve_yielded(yielded)
            except Exception as e:
                pending_error = e
                send_value = None
    finally:
        generator.close()


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


def await_async(subject: Suspendable | Any, *args: Any, **kwargs: Any) -> asyncio.Future[Any]:
    """Wrap ``subject`` into a future that settles exactly once.

    ``subject`` may be a future, an awaitable, a generator, a generator function, a
    coroutine function or any other callable; callables are invoked with ``args`` and
    ``kwargs``. A plain value settles the future with itself. Must be called while an
    event loop is running.
    """
    loop = asyncio.get_running_loop()

    if asyncio.isfuture(subject) and not args and not kwargs:
        return subject

    if callable(subject) and not inspect.isawaitable(subject):
        try:
            subject = subject(*args, **kwargs)
        except Exception as e:
            failed = loop.create_future()
            failed.set_exception(e)
            return failed

    if inspect.isgenerator(subject):
        return loop.create_task(_drive(subject))
    if asyncio.isfuture(subject):
        return subject
    if inspect.isawaitable(subject):
        return loop.create_task(_await(subject))

    resolved = loop.create_future()
    resolved.set_result(subject)
    return resolved


async def settle(subject: Suspendable | Any, *args: Any, **kwargs: Any) -> Outcome:
    """Await ``subject`` through :func:`await_async` and capture its outcome."""
    try:
        value = await await_async(subject, *args, **kwargs)
    except Exception as e:
        return Outcome(error=e)
    return Outcome(value=value)


def error_message(error: BaseException) -> str:
    """Message an error was raised with, without the quoting some exceptions add in ``str()``."""
    if len(error.args) == 1 and isinstance(error.args[0], str):
        return error.args[0]
    return str(error)


def _message_matches(expected: str | re.Pattern[str], actual: str) -> bool:
    if isinstance(expected, re.Pattern):
        return expected.search(actual) is not None
    return actual == expected


async def must_throw(
    subject: Suspendable | Any,
    expected_message: str | re.Pattern[str],
    *args: Any,
    **kwargs: Any,
) -> BaseException:
    """Assert that ``subject`` fails with ``expected_message``.

    A string must equal the error message exactly; a compiled pattern is searched.

    Returns:
        The error raised by ``subject``

    Raises:
        MustThrowError: If ``subject`` resolves normally or fails with another message
    """
    outcome = await settle(subject, *args, **kwargs)
    expected = expected_message.pattern if isinstance(expected_message, re.Pattern) else expected_message

    if outcome.error is None:
        log.debug("Expected failure did not occur", expected=expected, value=repr(outcome.value))
        raise MustThrowError(expected, None)

    actual = error_message(outcome.error)
    if not _message_matches(expected_message, actual):
        raise MustThrowError(expected, actual) from outcome.error
    return outcome.error


def as_coroutine_function(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn a generator function into a coroutine function driven by the bridge.

    Other callables are returned unchanged.
    """
    if not inspect.isgeneratorfunction(func):
        return func

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        return await await_async(func, *args, **kwargs)

    return wrapper


# 🔼⚙️🔚
