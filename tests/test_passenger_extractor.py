import pytest

from ticket.extraction.field_extractors import PassengerExtractor, decompose_status


@pytest.mark.parametrize("token, expected", [
    ("CNF/A1/46/UPPER", ("CNF", "A1/46/UPPER")),
    ("RLWL/23", ("RLWL", "23")),
    ("WL", ("WL", "")),
    ("cnf/b1/2", ("CNF", "b1/2")),
    ("XYZ/12", ("XYZ/12", "")),
])
def test_decompose_status(config, token, expected):
    assert decompose_status(token, config.status_vocabulary) == expected


class TestTableRows:

    def test_full_row(self, config):
        passenger = PassengerExtractor().parse_row("1. JOHN DOE 34 M CNF/A1/46/UPPER", config)

        assert passenger.seq == "1"
        assert passenger.name == "JOHN DOE"
        assert passenger.age == "34"
        assert passenger.gender == "M"
        assert passenger.status == "CNF"
        assert passenger.seat == "A1/46/UPPER"

    def test_status_token_chosen_over_plain_seat(self, config):
        passenger = PassengerExtractor().parse_row("1. JOHN DOE 34 M B2/34 CNF", config)
        assert (passenger.status, passenger.seat) == ("CNF", "B2/34")

    def test_seat_borrowed_from_second_token(self, config):
        passenger = PassengerExtractor().parse_row("1. JOHN DOE 34 M CNF CNF/A1/46/UPPER", config)
        assert (passenger.status, passenger.seat) == ("CNF", "A1/46/UPPER")

    def test_short_row(self, config):
        passenger = PassengerExtractor().parse_row("2. JANE DOE RLWL/23", config)

        assert (passenger.seq, passenger.name) == ("2", "JANE DOE")
        assert (passenger.status, passenger.seat) == ("RLWL", "23")
        assert passenger.age == ""

    def test_non_row(self, config):
        assert PassengerExtractor().parse_row("# Name Age Gender Booking Status", config) is None


def test_sample_ticket_passengers(make_context, sample_text):
    candidate = PassengerExtractor().extract(make_context(sample_text))
    passengers = candidate.value

    assert candidate.strategy == "passenger_table"
    assert [p.name for p in passengers] == ["JOHN DOE", "JANE DOE"]
    assert passengers[1].seat == "A1/47/LOWER"


def test_table_stops_at_stop_word(make_context):
    context = make_context([
        "Passenger Details",
        "1. JOHN DOE 34 M CNF/A1/46/UPPER",
        "Total Fare 1850",
        "2. JANE DOE 31 F CNF/A1/47/LOWER",
    ])
    passengers = PassengerExtractor().extract(context).value
    assert [p.seq for p in passengers] == ["1"]


def test_duplicate_seq_first_wins(make_context):
    context = make_context([
        "S.No Name Age Gender Status",
        "1. JOHN DOE 34 M CNF/A1/46/UPPER",
        "1. JOHN DOE 34 M WL/12",
    ])
    passengers = PassengerExtractor().extract(context).value

    assert len(passengers) == 1
    assert passengers[0].status == "CNF"


def test_rows_beyond_window_fall_back_to_status_scan(make_context, config):
    context = make_context(
        ["Passenger Details", "filler", "filler", "1. JOHN DOE 34 M CNF/A1/46/UPPER"],
        extraction_config=config.with_overrides(passenger_window=2),
    )
    candidate = PassengerExtractor().extract(context)

    assert candidate.strategy == "status_scan"
    assert candidate.value[0].name == "JOHN DOE"


def test_status_scan_without_header(make_context):
    context = make_context(["1. RAVI KUMAR 45 M", "CNF/S4/12/LOWER"])
    candidate = PassengerExtractor().extract(context)
    passenger = candidate.value[0]

    assert candidate.strategy == "status_scan"
    assert (passenger.seq, passenger.name) == ("1", "RAVI KUMAR")
    assert (passenger.age, passenger.gender) == ("45", "M")
    assert (passenger.status, passenger.seat) == ("CNF", "S4/12/LOWER")


def test_status_scan_looks_back_a_bounded_distance(make_context, config):
    context = make_context(
        ["1. RAVI KUMAR", "x" * 80, "CNF"],
        extraction_config=config.with_overrides(fallback_window=40),
    )
    assert PassengerExtractor().extract(context) is None


def test_no_passengers(make_context):
    assert PassengerExtractor().extract(make_context(["PNR: 8523697410"])) is None
