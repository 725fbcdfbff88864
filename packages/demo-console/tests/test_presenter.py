"""
Tests for ScrollPresenter.

Covers the deferred scroll (immediate post and delayed variants), the
coalescing of pending scrolls and rendering of the visible window.
"""

import asyncio
import io

import pytest
from rich.console import Console

from demo_console.presenter import PLACEHOLDER, PresenterState, ScrollPresenter
from demo_console.sink import LogSink


def _render(presenter: ScrollPresenter, width: int = 40) -> str:
    console = Console(file=io.StringIO(), width=width, color_system=None)
    console.print(presenter)
    return console.file.getvalue()


class TestInlinePresenter:
    """Presenter without a loop scrolls as soon as content changes."""

    def test_subscribes_to_sink(self):
        sink = LogSink()
        presenter = ScrollPresenter(sink, height=3)

        sink.append("hello")

        assert presenter.snapshot.contents == ["hello"]
        assert presenter.state is PresenterState.IDLE

    def test_starts_from_existing_content(self):
        sink = LogSink()
        sink.append("already there")

        presenter = ScrollPresenter(sink, height=3)

        assert presenter.snapshot.contents == ["already there"]

    def test_pins_last_line_to_bottom(self):
        """After five lines in a 3-row viewport the offset shows lines 3-5."""
        sink = LogSink()
        presenter = ScrollPresenter(sink, height=3)

        for i in range(1, 6):
            sink.append(f"line {i}")

        assert presenter.offset == 2
        output = _render(presenter)
        assert "line 5" in output
        assert "line 3" in output
        assert "line 2" not in output

    def test_clear_resets_offset(self):
        sink = LogSink()
        presenter = ScrollPresenter(sink, height=2)
        sink.append("a\nb\nc\nd")

        sink.clear()

        assert presenter.offset == 0
        assert PLACEHOLDER in _render(presenter)

    def test_manual_scroll_is_clamped_and_repinned(self):
        """scroll_by() moves within bounds; the next update pins to the end."""
        sink = LogSink()
        presenter = ScrollPresenter(sink, height=2)
        sink.append("a\nb\nc\nd")
        assert presenter.offset == 2

        presenter.scroll_by(-10)
        assert presenter.offset == 0
        presenter.scroll_by(10)
        assert presenter.offset == 2

        presenter.scroll_by(-1)
        sink.append("e")
        assert presenter.offset == 3

    def test_scroll_uses_wrapped_extent(self):
        """Long lines wrap at the rendered width and count toward the extent."""
        sink = LogSink()
        presenter = ScrollPresenter(sink, height=2)
        _render(presenter, width=10)

        sink.append("x" * 25)

        assert presenter.extent == 3
        assert presenter.offset == 1


class TestDeferredScroll:
    """Presenter bound to a loop defers the scroll after the update."""

    @pytest.mark.asyncio
    async def test_immediate_post_runs_on_next_iteration(self):
        sink = LogSink()
        presenter = ScrollPresenter(
            sink, height=2, scroll_delay=0, loop=asyncio.get_running_loop()
        )

        sink.append("a\nb\nc")

        assert presenter.snapshot.contents == ["a", "b", "c"]
        assert presenter.state is PresenterState.UPDATE_PENDING
        assert presenter.offset == 0

        await asyncio.sleep(0)

        assert presenter.state is PresenterState.IDLE
        assert presenter.offset == 1

    @pytest.mark.asyncio
    async def test_delayed_scroll_waits_for_delay(self):
        sink = LogSink()
        presenter = ScrollPresenter(
            sink, height=1, scroll_delay=0.05, loop=asyncio.get_running_loop()
        )

        sink.append("a\nb")
        await asyncio.sleep(0)
        assert presenter.state is PresenterState.UPDATE_PENDING

        await asyncio.sleep(0.1)
        assert presenter.state is PresenterState.IDLE
        assert presenter.offset == 1

    @pytest.mark.asyncio
    async def test_pending_scrolls_coalesce(self):
        """Several updates before the scroll runs lead to one scroll to the latest end."""
        sink = LogSink()
        presenter = ScrollPresenter(
            sink, height=1, scroll_delay=0, loop=asyncio.get_running_loop()
        )
        calls = []
        original = presenter.scroll_to_end

        def counting_scroll():
            calls.append(1)
            original()

        presenter.scroll_to_end = counting_scroll

        sink.append("a")
        sink.append("b")
        sink.append("c")
        await asyncio.sleep(0)

        assert len(calls) == 1
        assert presenter.offset == 2

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_scroll(self):
        sink = LogSink()
        presenter = ScrollPresenter(
            sink, height=1, scroll_delay=0, loop=asyncio.get_running_loop()
        )

        sink.append("a\nb")
        presenter.cancel()
        await asyncio.sleep(0)

        assert presenter.state is PresenterState.IDLE
        assert presenter.offset == 0
