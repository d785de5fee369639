from ticket.config import ExtractionConfig
from ticket.extraction.models import Candidate, TicketRecord
from ticket.extraction.shared_utils import MemorySink, Strategy, run_cascade
from ticket.extraction.shared_utils.diagnostics import ERR, OK, WARN
from ticket.orchestration.ticket_extractor import TicketExtractor, temporary_record_id


def test_sample_ticket_record(extractor, sample_text):
    record = extractor.extract(sample_text)

    assert record.pnr == "8523697410"
    assert (record.train_no, record.train_name) == ("12297", "ADI PUNE DURONTO")
    assert record.train == "12297/ADI PUNE DURONTO"
    assert (record.from_station, record.to_station) == ("AHMEDABAD JN (ADI)", "PUNE JN (PUNE)")
    assert (record.from_code, record.to_code) == ("ADI", "PUNE")
    assert record.travel_class == "THIRD AC"
    assert record.quota == "GENERAL"
    assert record.date_of_journey == "10-Jan-2025"
    assert record.departure_time == "20:45"
    assert record.arrival == "05:30 11-Jan-2025"
    assert record.distance == "627 KM"
    assert record.fare == "1850.00"
    assert record.booking_date == "02-Jan-2025 11:32:45 HRS"
    assert record.transaction_id == "100005678912345"
    assert record.status == "CNF"
    assert len(record.passengers) == 2
    assert record.record_id == "8523697410"


def test_extraction_is_idempotent(extractor, sample_text):
    assert extractor.extract(sample_text) == extractor.extract(sample_text)


def test_meta_is_attached_unchanged(extractor, sample_text):
    meta = {'file_name': 'ticket.pdf', 'size': 1024}
    record = extractor.extract(sample_text, meta=meta)

    assert record.meta == meta
    assert record.to_dict()['_meta'] == meta


def test_to_dict_omits_absent_fields(extractor):
    data = extractor.extract("PNR: 4512345678").to_dict()

    assert data['pnr'] == "4512345678"
    assert data['_id'] == "4512345678"
    assert 'fare' not in data
    assert data['passengers'] == []


def test_record_round_trips_through_dict(extractor, sample_text):
    record = extractor.extract(sample_text, meta={'file_name': 'a.pdf'})
    assert TicketRecord.from_dict(record.to_dict()) == record


def test_graceful_degradation(extractor, sink):
    record = extractor.extract("Nothing useful here", sink=sink)

    assert record.passengers == []
    assert record.status is None
    assert record.pnr is None
    assert record.record_id == temporary_record_id("Nothing useful here")
    assert "passengers: not found" in sink.messages(WARN)
    assert sink.messages(ERR) == []


def test_empty_text(extractor):
    record = extractor.extract("")
    assert record.record_id.startswith("tmp-")
    assert record.to_dict()['passengers'] == []


def test_temporary_id_is_deterministic():
    assert temporary_record_id("abc") == temporary_record_id("abc")
    assert temporary_record_id("abc") != temporary_record_id("abd")


def test_one_diagnostic_per_field(extractor, sample_text, sink):
    extractor.extract(sample_text, sink=sink)
    ok = sink.messages(OK)

    assert "pnr: 8523697410 [label_next_line]" in ok
    assert "from_station: AHMEDABAD JN (ADI) [booked_from_header]" in ok
    assert "passengers: 2 [passenger_table]" in ok
    assert sink.messages(WARN) == []


def test_partial_station_reports_missing_side(extractor, sink):
    record = extractor.extract("Boarding At: VADODARA JN (BRC)", sink=sink)

    assert record.from_station == "VADODARA JN (BRC)"
    assert record.from_code == "BRC"
    assert record.to_station is None
    assert "to_station: not found" in sink.messages(WARN)


def test_failing_extractor_is_isolated(extractor, sample_text, sink, monkeypatch):
    pnr_extractor = extractor.extractors[0]

    def boom(context):
        raise RuntimeError("boom")

    monkeypatch.setattr(pnr_extractor, 'extract', boom)
    record = extractor.extract(sample_text, sink=sink)

    assert record.pnr is None
    assert record.train_no == "12297"
    assert record.record_id.startswith("tmp-")
    assert "pnr: extractor failed: boom" in sink.messages(ERR)


def test_failing_strategy_falls_through(make_context, sink):
    context = make_context(["anything"], sink=sink)

    def broken(ctx):
        raise ValueError("bad pattern")

    strategies = [
        Strategy('broken', broken),
        Strategy('fixed', lambda ctx: Candidate("value", 0, 3)),
    ]
    candidate = run_cascade('field', strategies, context)

    assert candidate == Candidate("value", 1, 3, "fixed")
    assert sink.messages(WARN) == ["field: strategy broken failed: bad pattern"]


def test_all_strategies_failing_gives_none(make_context):
    strategies = [Strategy('nothing', lambda ctx: None)]
    assert run_cascade('field', strategies, make_context(["x"])) is None


def test_extractor_without_config_uses_packaged_defaults(sample_text):
    extractor = TicketExtractor(sink=MemorySink())

    assert extractor.config == ExtractionConfig()
    assert extractor.extract(sample_text).pnr == "8523697410"
    assert len(extractor.sink) > 0
