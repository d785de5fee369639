import json

import pytest

fitz = pytest.importorskip("fitz")

from ticket.cli import main
from ticket.exceptions import TicketInputError
from ticket.orchestration.ticket_extractor import TicketExtractor
from ticket.pipeline import TicketExtractionService
from ticket.reconstruction import pdf_source
from ticket.reconstruction.pdf_source import extract_pdf_pages, extract_pdf_text


def build_pdf(pages):
    """Each page is a list of (x, y_from_top, text)."""
    doc = fitz.open()
    for items in pages:
        page = doc.new_page()
        for x, y, text in items:
            page.insert_text((x, y), text, fontsize=10)
    data = doc.tobytes()
    doc.close()
    return data


TICKET_PAGES = [
    [
        (300, 120, "8523697410"),
        (72, 120, "PNR:"),
        (72, 100, "Booked from To"),
        (72, 140, "Train No./Name: 12297/ADI PUNE DURONTO"),
        (72, 160, "Class: THIRD AC"),
    ],
    [
        (72, 80, "Passenger Details"),
        (72, 100, "1. JOHN DOE 34 M CNF/A1/46/UPPER"),
    ],
]


@pytest.fixture
def ticket_pdf(tmp_path):
    path = tmp_path / "ticket.pdf"
    path.write_bytes(build_pdf(TICKET_PAGES))
    return path


def test_pages_are_returned_in_order(ticket_pdf):
    pages = extract_pdf_pages(ticket_pdf, max_workers=2)

    assert [number for number, _ in pages] == [1, 2]
    assert all(fragments for _, fragments in pages)


def test_worker_processes_match_in_process_decoding(ticket_pdf):
    assert extract_pdf_pages(ticket_pdf, max_workers=2) == extract_pdf_pages(ticket_pdf, max_workers=1)


def test_single_worker_decodes_without_a_pool(ticket_pdf, monkeypatch):
    def no_pool(*args, **kwargs):
        raise AssertionError("a pool was started")

    monkeypatch.setattr(pdf_source.multiprocessing, "Pool", no_pool)
    pages = extract_pdf_pages(ticket_pdf, max_workers=1)

    assert [number for number, _ in pages] == [1, 2]


def test_text_is_in_reading_order(ticket_pdf):
    lines = extract_pdf_text(ticket_pdf).splitlines()

    assert lines[0] == "Booked from To"
    assert lines[1] == "PNR: 8523697410"
    assert lines[-1] == "1. JOHN DOE 34 M CNF/A1/46/UPPER"


def test_corrupt_pdf_raises():
    with pytest.raises(TicketInputError):
        extract_pdf_pages(b"this is not a pdf")


def test_missing_file_raises(tmp_path):
    with pytest.raises(TicketInputError):
        extract_pdf_pages(tmp_path / "nope.pdf")


def test_pdf_without_text_raises():
    with pytest.raises(TicketInputError):
        extract_pdf_text(build_pdf([[]]))


def test_extract_from_pdf_fills_meta(ticket_pdf):
    record = TicketExtractor().extract_from_pdf(ticket_pdf)

    assert record.pnr == "8523697410"
    assert record.train_name == "ADI PUNE DURONTO"
    assert record.passengers[0].seat == "A1/46/UPPER"
    assert record.meta['file_name'] == "ticket.pdf"
    assert record.meta['size'] == ticket_pdf.stat().st_size
    assert record.meta['extracted_at']


def test_input_error_names_the_file(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"%PDF-1.4 garbage")

    with pytest.raises(TicketInputError) as excinfo:
        TicketExtractor().extract_from_pdf(path)
    assert "broken.pdf" in str(excinfo.value)


def test_service_success(ticket_pdf):
    result = TicketExtractionService(extractor=TicketExtractor()).process_ticket(str(ticket_pdf))

    assert result['success'] is True
    assert result['data']['pnr'] == "8523697410"
    assert any(event['message'].startswith("pnr:") for event in result['diagnostics'])


def test_service_failure(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"nope")
    result = TicketExtractionService(extractor=TicketExtractor()).process_ticket(str(path))

    assert result == {'success': False, 'error': result['error'], 'data': {}}
    assert result['error']


def test_cli_prints_json_and_writes_csv(ticket_pdf, tmp_path, capsys):
    csv_path = tmp_path / "tickets.csv"
    exit_code = main([str(ticket_pdf), "--csv", str(csv_path), "--workers", "1"])

    assert exit_code == 0
    record = json.loads(capsys.readouterr().out)
    assert record['pnr'] == "8523697410"
    assert csv_path.exists()


def test_cli_reports_unreadable_files(ticket_pdf, tmp_path, capsys):
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"nope")

    assert main([str(ticket_pdf), str(broken)]) == 1
    assert "broken.pdf" in capsys.readouterr().err
