#!/usr/bin/env python3
"""PDFminion: add chapter and page numbers to a batch of PDF files."""

import argparse
import logging
import platform
import sys

from dotenv import load_dotenv

from files import PipelineError
from language import detect_system_language, list_languages, LANGUAGE_NAMES
from models import format_settings
from process import process_pdfs
from settings import ConfigError, configure_application

__version__ = "0.1.0"

COMMANDS = ("process", "settings", "version", "credits", "list-languages")

CREDITS = [
    "PDFminion stands on the shoulders of giants. Thanks to:",
    "pypdf (https://github.com/py-pdf/pypdf)",
    "ReportLab (https://www.reportlab.com)",
    "PyYAML (https://pyyaml.org)",
    "python-dotenv (https://github.com/theskumar/python-dotenv)",
    "The Python community (https://www.python.org)",
]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pdfminion",
        description="Add page numbers to PDF files, with chapter numbers, blank-page padding and more.",
    )
    p.add_argument(
        "command",
        nargs="?",
        choices=COMMANDS,
        default="process",
        help="'process' (default) numbers the PDFs; 'settings' shows the final configuration",
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--config", default=None, help="Path to a YAML configuration file")
    p.add_argument("-s", "--source", default=None, help="Source directory for PDF files")
    p.add_argument("-t", "--target", default=None, help="Target directory for processed files")
    p.add_argument(
        "-f", "--force", action=argparse.BooleanOptionalAction, default=None,
        help="Overwrite files in a non-empty target directory",
    )
    p.add_argument(
        "-e", "--evenify", action=argparse.BooleanOptionalAction, default=None,
        help="Ensure an even page count per file (default: on)",
    )
    p.add_argument(
        "--merge", nargs="?", const="", default=None, metavar="FILENAME",
        help="Merge all processed files into FILENAME (default: merged.pdf)",
    )
    p.add_argument("-l", "--language", default=None, help="Override the system language, e.g. DE, EN, FR")
    p.add_argument(
        "--strict-language", action="store_true",
        help="Fail instead of ignoring an unsupported --language",
    )
    p.add_argument("-r", "--running-header", default=None, help="Text for the running header")
    p.add_argument("-c", "--chapter-prefix", default=None, help="Prefix for chapter numbers")
    p.add_argument("--separator", default=None, help="Separator between chapter and page")
    p.add_argument("-p", "--page-prefix", default=None, help="Prefix for page numbers")
    p.add_argument("--page-count-prefix", default=None, help="Prefix for the total page count")
    p.add_argument("-b", "--blank-page-text", default=None, help="Text for inserted blank pages")
    p.add_argument(
        "--personal", action=argparse.BooleanOptionalAction, default=None,
        help="Add a personal touch to the output",
    )
    p.add_argument(
        "-v", "--verbose", action=argparse.BooleanOptionalAction, default=None,
        help="Give more detailed output during processing",
    )
    return p


def print_version() -> None:
    print(f"PDFminion version {__version__}")
    print(f"Running on: Python {platform.python_version()} ({platform.system()})")


def print_languages() -> None:
    print("Supported Languages:")
    for code, native_name, english_name in list_languages():
        print(f"Code {code} ({native_name}, {english_name})")
    current = detect_system_language()
    native_name, english_name = LANGUAGE_NAMES[current]
    print(f"Current system language: {current} ({native_name}, {english_name})")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    load_dotenv()

    if args.command == "version":
        print_version()
        return 0
    if args.command == "credits":
        print("\n".join(CREDITS))
        return 0
    if args.command == "list-languages":
        print_languages()
        return 0

    try:
        config = configure_application(args)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    # A config file may switch on verbose output too
    logging.getLogger().setLevel(logging.DEBUG if config.verbose else logging.WARNING)

    if args.command == "settings":
        print("\n".join(format_settings(config)))
        return 0
    if config.verbose:
        print("\n".join(format_settings(config)))

    print(f"Processing PDFs in {config.source_dir!r}")
    try:
        process_pdfs(config)
    except PipelineError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
