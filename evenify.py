"""Pad odd-length documents with a captioned blank page."""

import logging
from dataclasses import replace

import pdf_utils
from models import FileRecord
from pdf_utils import Placement, StampStyle
from utils import is_even

BLANK_PAGE_STYLE = StampStyle(
    font_name="Helvetica",
    font_size=48,
    color=(0.5, 0.6, 0.5),
    rotation=45,
    fit_width=0.8,
)
BLANK_PAGE_PLACEMENT = Placement("c")


def evenify(records: list[FileRecord], blank_page_text: str, verbose: bool = False) -> list[FileRecord]:
    """Append a blank page to every record with an odd page count.

    Args:
        records: Records whose files live in the target directory.
        blank_page_text: Caption for the new page. Empty means no caption.
        verbose: Print a line for each evenified file.

    Returns:
        The records with their final page counts. A record whose insertion
        failed keeps its original count.
    """
    result = []
    for record in records:
        if is_even(record.page_count):
            result.append(record)
            continue

        try:
            pdf_utils.insert_blank_page(record.path, after_page=record.page_count)
        except pdf_utils.PDF_ERRORS as e:
            logging.error(f"Error adding blank page to {record.path}: {e}")
            result.append(record)
            continue

        record = replace(record, page_count=record.page_count + 1)

        if blank_page_text:
            try:
                pdf_utils.stamp(
                    record.path,
                    [record.page_count],
                    blank_page_text,
                    BLANK_PAGE_PLACEMENT,
                    BLANK_PAGE_STYLE,
                )
            except pdf_utils.PDF_ERRORS as e:
                logging.error(f"Error stamping blank page in file {record.path}: {e}")

        if verbose:
            print(f"File {record.path} was evenified")
        logging.debug(f"{record.path} was evenified to {record.page_count} pages")
        result.append(record)

    return result
