"""Tests for per-source mutual exclusion."""

import asyncio

import pytest

from enterprise_rag.core.source_locks import SourceLockRegistry


async def _work(registry: SourceLockRegistry, sources: list[str], name: str, log: list[str]) -> None:
    async with registry.hold(sources):
        log.append(f"{name}:start")
        await asyncio.sleep(0.01)
        log.append(f"{name}:end")


class TestSourceLockRegistry:
    @pytest.mark.asyncio
    async def test_same_source_is_serialized(self) -> None:
        registry = SourceLockRegistry()
        log: list[str] = []

        await asyncio.gather(
            _work(registry, ["policy.pdf"], "first", log),
            _work(registry, ["policy.pdf"], "second", log),
        )

        assert log == ["first:start", "first:end", "second:start", "second:end"]

    @pytest.mark.asyncio
    async def test_different_sources_run_concurrently(self) -> None:
        registry = SourceLockRegistry()
        log: list[str] = []

        await asyncio.gather(
            _work(registry, ["a.pdf"], "first", log),
            _work(registry, ["b.pdf"], "second", log),
        )

        assert log[:2] == ["first:start", "second:start"]

    @pytest.mark.asyncio
    async def test_overlapping_batches_in_any_order_do_not_deadlock(self) -> None:
        registry = SourceLockRegistry()
        log: list[str] = []

        await asyncio.wait_for(
            asyncio.gather(
                _work(registry, ["a.pdf", "b.pdf"], "first", log),
                _work(registry, ["b.pdf", "a.pdf"], "second", log),
            ),
            timeout=2,
        )

        assert len(log) == 4

    @pytest.mark.asyncio
    async def test_locks_released_and_forgotten(self) -> None:
        registry = SourceLockRegistry()

        async with registry.hold(["a.pdf", "a.pdf", "b.pdf"]):
            assert len(registry) == 2
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_released_on_error(self) -> None:
        registry = SourceLockRegistry()

        with pytest.raises(RuntimeError):
            async with registry.hold(["a.pdf"]):
                raise RuntimeError("boom")

        assert len(registry) == 0
        async with asyncio.timeout(1):
            async with registry.hold(["a.pdf"]):
                pass
