"""Chapter and page numbering across a batch of PDFs.

Every file is a chapter, numbered by its position in the batch. Page numbers
run on continuously from one file to the next. Even pages carry their label
bottom-left and odd pages bottom-right, which gives correctly facing numbers
when printed double-sided.
"""

import logging

import pdf_utils
from models import EffectiveConfig, FileRecord
from pdf_utils import Placement, Stamp, StampStyle
from utils import is_even

PAGE_NUMBER_STYLE = StampStyle(font_name="Helvetica", font_size=16, color=(0.5, 0.5, 0.5))
EVEN_PAGE_PLACEMENT = Placement("bl", dx=20, dy=6)
ODD_PAGE_PLACEMENT = Placement("br", dx=-20, dy=6)


def page_label(chapter: int, page_number: int, config: EffectiveConfig) -> str:
    return f"{config.chapter_prefix}{chapter}{config.separator}{config.page_number_prefix}{page_number}"


def placement_for(page_number: int) -> Placement:
    return EVEN_PAGE_PLACEMENT if is_even(page_number) else ODD_PAGE_PLACEMENT


def chapter_offsets(records: list[FileRecord]) -> list[int]:
    """Return the number of pages preceding each record in the batch."""
    offsets = []
    offset = 0
    for record in records:
        offsets.append(offset)
        offset += record.page_count
    return offsets


def page_stamps_for_file(chapter: int, offset: int, page_count: int, config: EffectiveConfig) -> dict[int, Stamp]:
    """Map each 1-based page of one file to its label stamp."""
    stamps = {}
    for page in range(1, page_count + 1):
        absolute_page = offset + page
        stamps[page] = Stamp(
            page_label(chapter, absolute_page, config),
            placement_for(absolute_page),
            PAGE_NUMBER_STYLE,
        )
    return stamps


def add_page_numbers_to_all_files(records: list[FileRecord], config: EffectiveConfig) -> int:
    """Stamp chapter and page labels onto every page of every record.

    Stamping is best effort: a file that cannot be stamped is logged and the
    remaining files are still processed.

    Returns:
        The total number of pages in the batch.
    """
    offsets = chapter_offsets(records)
    for chapter, (record, offset) in enumerate(zip(records, offsets), start=1):
        first, last = offset + 1, offset + record.page_count
        logging.debug(f"Adding page numbers to {record.path}: chapter {chapter}, pages {first}-{last}")
        if config.verbose:
            print(f"File {record.path} starts {first}, ends {last}")

        stamps = page_stamps_for_file(chapter, offset, record.page_count, config)
        try:
            pdf_utils.stamp_pages(record.path, stamps)
        except pdf_utils.PDF_ERRORS as e:
            logging.error(f"Error adding page numbers to {record.path}: {e}")

    return sum(record.page_count for record in records)
