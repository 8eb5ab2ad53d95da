#!/usr/bin/env python3
"""
Main Entry Point for the Invoice Labeler

CLI interface for guideline import, invoice processing, report export
and annotated invoice download. All state lives for one command (or one
interactive session).
"""

import argparse
import logging
import shlex
import sys
from pathlib import Path
from typing import Callable, List, Optional

from .extraction.text_layer import TextLayerExtractor, check_tesseract_installation
from .extraction.field_extractor import FieldExtractor
from .session import LabelingSession, ProcessingResult
from .utils.config import LabelerConfig
from .utils.errors import LabelingError

NO_GUIDELINES_PROMPT = (
    "No guidelines loaded. Continue without them? "
    "Cost center and numbers will be set to defaults. [y/N] "
)


def confirm(prompt: str, input_func: Optional[Callable[[str], str]] = None) -> bool:
    input_func = input_func or input
    try:
        answer = input_func(prompt)
    except (EOFError, KeyboardInterrupt):
        return False
    return answer.strip().lower() in ('y', 'yes', 't', 'tak')


def print_result(result: ProcessingResult) -> None:
    """Print a processed record as label: value lines."""
    print("-" * 60)
    for column, value in result.record.to_row().items():
        print(f"  {column}: {value}")
    print("-" * 60)


def cmd_process(session: LabelingSession, args) -> int:
    if args.guidelines:
        imported = session.import_guidelines(args.guidelines)
        print(f"Guidelines loaded: {imported} row(s)")

    if not session.has_guidelines and not args.yes:
        if not confirm(NO_GUIDELINES_PROMPT):
            print("Aborted.")
            return 1

    failures = 0
    for file_path in args.files:
        print(f"\nProcessing: {file_path}")
        try:
            result = session.process_file(file_path, annotate=not args.no_annotate)
        except LabelingError as e:
            print(f"  Error: {e}")
            failures += 1
            continue

        print_result(result)
        if not args.no_annotate:
            saved = session.save_annotated(args.output_dir)
            print(f"  Saved annotated invoice to: {saved}")

    if session.records:
        report_path = Path(args.output_dir) / args.report
        session.export_report(report_path)
        print(f"\n✓ Report saved to: {report_path} ({len(session.records)} record(s))")

    return 1 if failures else 0


def cmd_extract(config: LabelerConfig, args) -> int:
    text_extractor = TextLayerExtractor(
        tesseract_path=config.tesseract_path,
        use_ocr_fallback=config.use_ocr_fallback,
        ocr_language=config.ocr_language,
    )
    path = Path(args.file_path)
    if not path.is_file():
        print(f"[ERROR] Path not found: {path}")
        return 1

    text = text_extractor.extract(path.read_bytes(), file_name=path.name)
    fields = FieldExtractor().extract(text)
    print(f"Vendor: {fields.display_vendor}")
    print(f"Buyer NIP: {fields.display_buyer_tax_id}")
    print(f"Invoice number: {fields.display_invoice_number}")
    return 0


def run_interactive(session: LabelingSession, input_func: Callable[[str], str] = input) -> None:
    """Read commands until exit; errors are reported and the loop continues."""
    print("\n" + "=" * 60)
    print("INVOICE LABELER - Interactive Mode")
    print("=" * 60)
    print_help()

    while True:
        try:
            line = input_func("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye!")
            break

        if not line:
            continue

        try:
            command, *rest = shlex.split(line)
        except ValueError as e:
            print(f"Error: {e}")
            continue
        command = command.lower()
        argument = rest[0] if rest else None

        if command in ('exit', 'quit'):
            print("Goodbye!")
            break

        try:
            if command == 'help':
                print_help()
            elif command == 'guidelines':
                imported = session.import_guidelines(argument or '')
                print(f"Guidelines loaded: {imported} row(s)")
            elif command == 'process':
                if not session.has_guidelines and not confirm(NO_GUIDELINES_PROMPT, input_func):
                    continue
                result = session.process_file(argument)
                print_result(result)
                print(f"Label: {result.display_label}")
            elif command == 'export':
                path = session.export_report(argument)
                print(f"Report saved to: {path}")
            elif command == 'download':
                path = session.save_annotated(argument)
                print(f"Annotated invoice saved to: {path}")
            elif command == 'records':
                if not session.records:
                    print("No invoices processed yet.")
                for record in session.records:
                    print(f"  {record.label}: {record.vendor} ({record.invoice_number})")
            else:
                print(f"Unknown command: {command}. Type 'help' for commands.")
        except LabelingError as e:
            print(f"Error: {e}")


def print_help() -> None:
    print("Commands:")
    print("  guidelines <path>  - Load the guidelines workbook")
    print("  process <path>     - Process an invoice (PDF or image)")
    print("  export [path]      - Save the Excel report")
    print("  download [dir]     - Save the last invoice with its label")
    print("  records            - List processed invoices")
    print("  'exit' or 'quit'   - Exit")


def check_ocr_status() -> None:
    """Check and display OCR status."""
    status = check_tesseract_installation()

    print("OCR Status:")
    print("-" * 40)
    if status['installed']:
        print("✓ Tesseract OCR is installed")
        print(f"  Version: {status['version']}")
        print(f"  Path: {status['path']}")
    else:
        print("✗ Tesseract OCR is not installed")
        if status['error']:
            print(f"  Error: {status['error']}")
        print("  Text-layer PDFs still work; scanned pages and images need Tesseract.")
    print("-" * 40)


def build_parser(config: LabelerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="invoice-labeler",
        description="Invoice Labeler - Extract, Number and Label Invoices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Process invoices using the guidelines workbook
  invoice-labeler process faktura1.pdf faktura2.pdf --guidelines wytyczne.xlsx

  # Show the fields found in an invoice
  invoice-labeler extract faktura1.pdf

  # Interactive mode
  invoice-labeler interactive
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    process_parser = subparsers.add_parser("process", help="Process invoices and write the report")
    process_parser.add_argument("files", nargs="+", help="Invoice PDF or image files")
    process_parser.add_argument("--guidelines", help="Guidelines workbook (.xlsx)")
    process_parser.add_argument(
        "--output-dir",
        default=config.output_dir,
        help="Directory for the report and annotated invoices",
    )
    process_parser.add_argument(
        "--report",
        default=config.report_file_name,
        help="Report file name",
    )
    process_parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Continue without guidelines without asking",
    )
    process_parser.add_argument(
        "--no-annotate",
        action="store_true",
        help="Do not write annotated invoice copies",
    )

    extract_parser = subparsers.add_parser("extract", help="Show extracted fields of an invoice")
    extract_parser.add_argument("file_path", help="Invoice PDF or image file")

    subparsers.add_parser("interactive", help="Start an interactive session")
    subparsers.add_parser("ocr-status", help="Check Tesseract OCR installation status")

    return parser


def main(argv: List[str] = None) -> int:
    """Main CLI entry point."""
    config = LabelerConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = build_parser(config)
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "ocr-status":
        check_ocr_status()
        return 0

    try:
        if args.command == "extract":
            return cmd_extract(config, args)

        session = LabelingSession(config=config)
        if args.command == "process":
            return cmd_process(session, args)
        if args.command == "interactive":
            run_interactive(session)
            return 0
    except LabelingError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
