"""
Command-line entry point: parse ticket PDFs and print their records as JSON.

    ticket-parse ticket1.pdf ticket2.pdf --csv tickets.csv --verbose
"""
import argparse
import json
import logging
import sys

from .config.config_manager import ConfigManager
from .exceptions import TicketInputError
from .extraction.shared_utils.diagnostics import MemorySink
from .orchestration.ticket_extractor import TicketExtractor
from .standardization.records import export_records_csv, merge_records

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(description="Extract structured records from railway ticket PDFs")
    parser.add_argument("files", nargs="+", help="Ticket PDF files")
    parser.add_argument("--config", help="Extraction config override (JSON or YAML)")
    parser.add_argument("--csv", help="Also write the ticket table to this CSV file")
    parser.add_argument("--workers", type=int, default=4,
                        help="Processes used to decode pages (default: 4)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print the diagnostic trace of every file")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    extractor = TicketExtractor(config=ConfigManager(args.config).extraction_config)
    records = []
    failed = 0

    for path in args.files:
        sink = MemorySink()
        try:
            record = extractor.extract_from_pdf(path, max_workers=args.workers, sink=sink)
        except TicketInputError as e:
            logger.error(f"❌ {e}")
            print(f"Error: {e}", file=sys.stderr)
            failed += 1
            continue

        records = merge_records(records, record)
        print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))

        if args.verbose:
            for event in sink.events:
                print(f"{event.level.upper():5} {event}", file=sys.stderr)

    if args.csv and records:
        export_records_csv(records, args.csv)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
