import json
import logging
import sys

from config.logging import JsonFormatter, SamplingFilter


def _record(msg="document.created", level=logging.INFO, **extra):
    record = logging.LogRecord("challan.documents", level, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_merges_extra_context():
    payload = json.loads(JsonFormatter().format(_record(event="document.created", document_id=7, tickets={"a"})))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "challan.documents"
    assert payload["message"] == "document.created"
    assert payload["event"] == "document.created"
    assert payload["document_id"] == 7
    assert payload["tickets"] == "{'a'}"
    assert payload["time"].endswith("Z")
    assert "pathname" not in payload


def test_json_formatter_renders_exceptions():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("challan", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in payload["exception"]


def test_sampling_filter_rates_and_levels():
    assert SamplingFilter(rate=0.0).filter(_record()) is False
    assert SamplingFilter(rate=1.0).filter(_record()) is True
    assert SamplingFilter(rate=0.0).filter(_record(level=logging.WARNING)) is True
    assert SamplingFilter(rate="nonsense").rate == 1.0


def test_sampling_filter_never_drops_allowed_events():
    keep = SamplingFilter(rate=0.0, allow_events=["ticket.split_holdings"])
    assert keep.filter(_record("ticket listing", event="ticket.split_holdings")) is True
    assert keep.filter(_record("ticket.split_holdings")) is True
    assert keep.filter(_record("other")) is False


# EOF
