"""Run the whole pipeline: collect, validate, copy, evenify, number, merge."""

import logging
import os

import pdf_utils
from evenify import evenify
from files import PipelineError, collect_candidate_pdfs, copy_validated_pdfs, validate_pdfs
from models import EffectiveConfig, FileRecord
from page_numbers import add_page_numbers_to_all_files
from utils import ensure_pdf_suffix


def process_pdfs(config: EffectiveConfig) -> list[FileRecord]:
    """Process every PDF in ``config.source_dir`` into ``config.target_dir``.

    Each stage completes for all files before the next one starts; page
    numbering relies on the final page counts of every file.

    Returns:
        The records of the processed files in chapter order.

    Raises:
        PipelineError: A fatal error that aborts the run.
    """
    logging.debug("Starting PDF processing")
    if config.verbose:
        print("Starting PDF processing")

    candidates = sorted(collect_candidate_pdfs(config.source_dir))
    if config.verbose:
        print(f"Found {len(candidates)} PDF files in {config.source_dir}")

    records = validate_pdfs(candidates)
    if not records:
        logging.warning(f"None of the {len(candidates)} PDF files in {config.source_dir} is valid")

    records = copy_validated_pdfs(records, config.target_dir, config.force)

    if config.evenify:
        records = evenify(records, config.blank_page_text, verbose=config.verbose)

    total_pages = add_page_numbers_to_all_files(records, config)
    print(f"Numbered {total_pages} pages in {len(records)} files")

    if config.merge and records:
        merge_path = os.path.join(config.target_dir, ensure_pdf_suffix(config.merge_file_name))
        try:
            pdf_utils.merge_pdfs([record.path for record in records], merge_path)
        except pdf_utils.PDF_ERRORS as e:
            raise PipelineError(f"Error merging files into {merge_path}: {e}") from e
        print(f"Created merged PDF: {merge_path}")

    return records
