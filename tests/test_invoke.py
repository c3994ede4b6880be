"""Tests for invoke() and settle()."""

import asyncio

import pytest

from wicket._internal.invoke import Failure, Success, invoke, settle


def _sync_add(a, b):
    return a + b


async def _async_add(a, b):
    await asyncio.sleep(0)
    return a + b


def _sync_raise():
    raise ValueError("sync")


async def _async_raise():
    await asyncio.sleep(0)
    raise ValueError("async")


class TestInvoke:
    async def test_sync_callable(self) -> None:
        assert await invoke(_sync_add, 1, 2) == 3

    async def test_async_callable(self) -> None:
        assert await invoke(_async_add, 1, 2) == 3

    async def test_kwargs(self) -> None:
        assert await invoke(_sync_add, a=1, b=2) == 3

    async def test_sync_returning_awaitable(self) -> None:
        def returns_coroutine():
            return _async_add(2, 3)

        assert await invoke(returns_coroutine) == 5

    async def test_exceptions_propagate(self) -> None:
        with pytest.raises(ValueError, match="sync"):
            await invoke(_sync_raise)


class TestSettle:
    async def test_sync_success(self) -> None:
        assert await settle(_sync_add, 1, 2) == Success(3)

    async def test_async_success(self) -> None:
        assert await settle(_async_add, 1, 2) == Success(3)

    async def test_sync_failure(self) -> None:
        outcome = await settle(_sync_raise)
        assert isinstance(outcome, Failure)
        assert isinstance(outcome.error, ValueError)

    async def test_async_failure(self) -> None:
        outcome = await settle(_async_raise)
        assert isinstance(outcome, Failure)
        assert str(outcome.error) == "async"

    async def test_sync_and_async_failures_take_same_branch(self) -> None:
        branches: list[str] = []
        for fn in (_sync_raise, _async_raise):
            match await settle(fn):
                case Success():
                    branches.append("success")
                case Failure(error=ValueError()):
                    branches.append("failure")
        assert branches == ["failure", "failure"]

    async def test_cancellation_is_not_captured(self) -> None:
        async def cancelled():
            raise asyncio.CancelledError

        with pytest.raises(asyncio.CancelledError):
            await settle(cancelled)

    async def test_none_is_a_success(self) -> None:
        assert await settle(lambda: None) == Success(None)
