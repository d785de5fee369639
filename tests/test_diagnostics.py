import logging

from ticket.extraction.shared_utils import LoggingSink, MemorySink, NullSink
from ticket.extraction.shared_utils.diagnostics import ERR, INFO, OK, WARN


def test_memory_sink_keeps_latest_events():
    sink = MemorySink(max_events=3)
    for number in range(5):
        sink.record(INFO, f"event {number}")

    assert len(sink) == 3
    assert sink.messages() == ["event 2", "event 3", "event 4"]


def test_memory_sink_filters_by_level():
    sink = MemorySink()
    sink.record(OK, "pnr: 1234567890 [label_inline]")
    sink.record(WARN, "fare: not found")

    assert sink.messages(WARN) == ["fare: not found"]
    assert sink.events[0].level == OK
    assert sink.events[0].timestamp


def test_memory_sink_unknown_level_becomes_info():
    sink = MemorySink()
    sink.record("debug", "hello")
    assert sink.events[0].level == INFO


def test_memory_sink_clear():
    sink = MemorySink()
    sink.record(ERR, "boom")
    sink.clear()
    assert sink.events == []


def test_null_sink_accepts_anything():
    NullSink().record(ERR, "ignored")


def test_logging_sink_maps_levels(caplog):
    target = logging.getLogger("ticket.tests.sink")
    sink = LoggingSink(target)

    with caplog.at_level(logging.INFO, logger="ticket.tests.sink"):
        sink.record(OK, "found")
        sink.record(WARN, "missing")
        sink.record(ERR, "failed")

    levels = [(record.levelno, record.getMessage()) for record in caplog.records]
    assert levels == [
        (logging.INFO, "found"),
        (logging.WARNING, "missing"),
        (logging.ERROR, "failed"),
    ]
