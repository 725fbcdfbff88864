"""Tests for echo(), SinkWriter and capture_output()."""

import sys
import threading

import pytest

from demo_console.output import SinkWriter, capture_output, current_sink, echo
from demo_console.sink import LogSink


class TestSinkWriter:
    """Tests for SinkWriter line buffering."""

    def test_print_becomes_one_line(self):
        """print() writes text and newline separately; one line results."""
        sink = LogSink()
        writer = SinkWriter(sink)

        print("hello", file=writer)

        assert sink.current_snapshot().contents == ["hello"]

    def test_partial_write_waits_for_newline(self):
        sink = LogSink()
        writer = SinkWriter(sink)

        writer.write("par")
        writer.write("tial")
        assert len(sink.current_snapshot()) == 0

        writer.write(" line\nnext")
        assert sink.current_snapshot().contents == ["partial line"]

        writer.flush()
        assert sink.current_snapshot().contents == ["partial line", "next"]

    def test_blank_print_is_blank_line(self):
        sink = LogSink()
        writer = SinkWriter(sink)

        print("result: 4\n", file=writer)

        assert sink.current_snapshot().contents == ["result: 4", ""]


class TestCaptureOutput:
    """Tests for capture_output() and echo()."""

    def test_echo_and_print_reach_sink(self):
        sink = LogSink()

        with capture_output(sink):
            echo("from echo")
            print("from print")

        assert sink.current_snapshot().contents == ["from echo", "from print"]

    def test_stdout_restored_after_block(self):
        original = sys.stdout
        with capture_output(LogSink()):
            assert sys.stdout is not original
        assert sys.stdout is original

    def test_unterminated_print_flushed_on_exit(self):
        sink = LogSink()

        with capture_output(sink):
            print("no newline", end="")

        assert sink.current_snapshot().contents == ["no newline"]

    def test_flushes_even_when_block_raises(self):
        sink = LogSink()

        with pytest.raises(RuntimeError):
            with capture_output(sink):
                print("partial", end="")
                raise RuntimeError("stop")

        assert sink.current_snapshot().contents == ["partial"]

    def test_echo_outside_demo_raises(self):
        with pytest.raises(RuntimeError, match="no active log sink"):
            echo("nowhere")

    def test_current_sink_handed_to_worker_thread(self):
        """A sink captured inside the block can be used from another thread."""
        sink = LogSink()

        with capture_output(sink):
            captured = current_sink()
            worker = threading.Thread(target=captured.append, args=("from worker",))
            worker.start()
            worker.join()

        assert captured is sink
        assert sink.current_snapshot().contents == ["from worker"]

    def test_echo_follows_unterminated_print(self):
        """Partial print() output is written before a later echo()."""
        sink = LogSink()

        with capture_output(sink):
            print("progress: ", end="")
            echo("next step")

        assert sink.current_snapshot().contents == ["progress: ", "next step"]

    def test_other_threads_print_to_real_stdout(self, capsys):
        """Only the capturing context's print() output goes to the sink."""
        sink = LogSink()

        with capture_output(sink):
            worker = threading.Thread(target=print, args=("outside the demo",))
            worker.start()
            worker.join()
            print("inside the demo")

        assert sink.current_snapshot().contents == ["inside the demo"]
        assert capsys.readouterr().out == "outside the demo\n"

    def test_nested_capture_restores_outer_sink(self):
        outer, inner = LogSink(), LogSink()

        with capture_output(outer):
            with capture_output(inner):
                print("to inner")
            print("to outer")

        assert inner.current_snapshot().contents == ["to inner"]
        assert outer.current_snapshot().contents == ["to outer"]
