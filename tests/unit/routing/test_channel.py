import re
from datetime import datetime

import pytest

from cidlog.correlation.context import Cid
from cidlog.routing.channel import Level, SeverityChannel, render_args, render_format
from cidlog.sinks.builtin import BufferSink

LINE_RE = r"^\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}\.\d{6} "


class ExplodingSink:
    def write(self, data):
        raise OSError("disk full")


class TestSeverityChannel:
    """Test line composition and writing for one level"""

    def test_levels_have_distinct_labels(self):
        labels = [level.label for level in Level]
        assert labels == ["[info]", "[trace]", "[warn]", "[error]"]

    def test_println_line_format(self, pid):
        sink = BufferSink()
        SeverityChannel(Level.TRACE, sink).println(None, "hello")
        lines = sink.lines()
        assert len(lines) == 1
        assert re.match(LINE_RE + r"\[trace\] \[1234\] hello$", lines[0])
        assert sink.getvalue().endswith(b"\n")

    def test_println_with_cid_joins_arguments_with_spaces(self, pid):
        sink = BufferSink()
        SeverityChannel(Level.WARN, sink).println(Cid(12), "slow", 830, "ms")
        assert sink.lines()[0].endswith("[warn] [1234][12] slow 830 ms")

    def test_println_passthrough_has_no_tag(self, pid):
        sink = BufferSink()
        SeverityChannel(Level.ERROR, sink).println("ctx", "a", "b")
        line = sink.lines()[0]
        assert line.endswith("[error] a b")
        assert "[1234]" not in line

    def test_one_write_per_call(self, pid, write_only_sink):
        channel = SeverityChannel(Level.TRACE, write_only_sink)
        channel.println(None, "a")
        channel.printf(None, "%s", "b")
        assert len(write_only_sink.chunks) == 2

    def test_failing_sink_is_swallowed(self, pid):
        channel = SeverityChannel(Level.ERROR, ExplodingSink())
        channel.println(None, "lost")
        channel.printf(None, "lost %d", 1)

    def test_channel_is_immutable(self):
        channel = SeverityChannel(Level.TRACE, BufferSink())
        with pytest.raises(AttributeError):
            channel.sink = BufferSink()

    def test_decorate_uses_microsecond_timestamp(self):
        channel = SeverityChannel(Level.INFO, BufferSink())
        now = datetime(2024, 5, 1, 10, 22, 3, 120573)
        assert channel.decorate("x", now) == "2024/05/01 10:22:03.120573 [info] x\n"

    def test_decorate_without_timestamps(self):
        channel = SeverityChannel(Level.INFO, BufferSink(), timestamps=False)
        assert channel.decorate("x") == "[info] x\n"


class TestPrintf:
    """Test printf-style lines, including formats that do not render"""

    def test_printf_line_format(self, pid):
        sink = BufferSink()
        SeverityChannel(Level.TRACE, sink).printf(
            Cid(3), "listen at %s:%d", "0.0.0.0", 1935
        )
        assert re.match(
            LINE_RE + r"\[trace\] \[1234\]\[3\] listen at 0\.0\.0\.0:1935$",
            sink.lines()[0],
        )

    def test_printf_keeps_single_trailing_newline(self, pid):
        sink = BufferSink()
        SeverityChannel(Level.TRACE, sink).printf(None, "done\n")
        assert sink.getvalue().endswith(b"done\n")
        assert not sink.getvalue().endswith(b"\n\n")

    def test_printf_mismatch_passthrough_does_not_raise(self, pid):
        sink = BufferSink()
        SeverityChannel(Level.TRACE, sink).printf("raw", "%d items", "many")
        assert sink.lines()[0].endswith("[trace] %d items many")

    @pytest.mark.parametrize(
        "ctx, tag",
        [(None, "[1234] "), (Cid(3), "[1234][3] ")],
    )
    def test_printf_literal_percent_keeps_tag(self, pid, ctx, tag):
        sink = BufferSink()
        SeverityChannel(Level.TRACE, sink).printf(ctx, "cpu at 100%")
        line = sink.lines()[0]
        assert line.endswith("[trace] " + tag + "cpu at 100%")
        assert "%s" not in line

    @pytest.mark.parametrize(
        "ctx, tag",
        [(None, "[1234] "), (Cid(3), "[1234][3] ")],
    )
    def test_printf_mismatch_keeps_tag_in_front(self, pid, ctx, tag):
        sink = BufferSink()
        SeverityChannel(Level.ERROR, sink).printf(ctx, "%d items", "many")
        line = sink.lines()[0]
        assert line.endswith("[error] " + tag + "%d items many")
        assert line.count("1234") == 1

    def test_render_helpers(self):
        assert render_args("[1][2] ", ("a", 1)) == "[1][2] a 1"
        assert render_args(None, ("a", 1)) == "a 1"
        assert render_format("100%", ()) == "100%"
        assert render_format("%s-%s", (1, 2)) == "1-2"
        assert render_format("%d", ("x",)) == "%d x"
