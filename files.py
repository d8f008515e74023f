"""Collect, validate and copy the PDF files of a run."""

import glob
import logging
import os
import shutil
from dataclasses import replace

import pdf_utils
from models import FileRecord


class PipelineError(Exception):
    """A failure that aborts the whole run."""


class NoCandidatesError(PipelineError):
    pass


class TargetNotEmptyError(PipelineError):
    pass


class CopyError(PipelineError):
    pass


def collect_candidate_pdfs(source_dir: str) -> list[str]:
    """List ``*.pdf`` files directly inside ``source_dir``.

    The order is whatever the filesystem returns; callers sort it.

    Raises:
        NoCandidatesError: The directory is missing or holds no PDF files.
    """
    if not os.path.isdir(source_dir):
        raise NoCandidatesError(f"Source directory {source_dir!r} does not exist")

    files = glob.glob(os.path.join(glob.escape(source_dir), "*.pdf"))
    files = [f for f in files if os.path.isfile(f)]
    if not files:
        raise NoCandidatesError(f"No PDF files found in {source_dir}")

    logging.debug(f"Found {len(files)} candidate PDF files in {source_dir}")
    return files


def validate_pdfs(file_paths: list[str]) -> list[FileRecord]:
    """Keep the structurally valid PDFs, in input order, with their page counts."""
    records = []
    for file_path in file_paths:
        try:
            pdf_utils.validate_structure(file_path)
            page_count = pdf_utils.count_pages(file_path)
        except pdf_utils.PDF_ERRORS as e:
            logging.warning(f"{file_path} is not a valid PDF, skipping: {e}")
            continue
        records.append(FileRecord(path=file_path, page_count=page_count))
    return records


def prepare_target_dir(target_dir: str, force: bool) -> None:
    """Create ``target_dir`` if needed and make sure we may write into it.

    Raises:
        PipelineError: The path is not a readable directory.
        TargetNotEmptyError: The directory has content and ``force`` is off.
    """
    if not os.path.exists(target_dir):
        print(f"Target directory '{target_dir}' does not exist. Creating it...")
        try:
            os.makedirs(target_dir)
        except OSError as e:
            raise PipelineError(f"Failed to create directory '{target_dir}': {e}") from e
        return

    if not os.path.isdir(target_dir):
        raise PipelineError(f"Target '{target_dir}' is not a directory")

    try:
        with os.scandir(target_dir) as entries:
            empty = next(entries, None) is None
    except OSError as e:
        raise PipelineError(f"Cannot read directory '{target_dir}': {e}") from e

    if not empty and not force:
        raise TargetNotEmptyError(f"Target directory '{target_dir}' is not empty. Use --force to override")


def copy_validated_pdfs(records: list[FileRecord], target_dir: str, force: bool) -> list[FileRecord]:
    """Copy every record into ``target_dir``.

    Returns the copied records, pointing at their new location. A file that
    already exists at the destination is skipped unless ``force`` is set.

    Raises:
        PipelineError: A destination is the source file itself.
        TargetNotEmptyError: Checked before anything is copied.
        CopyError: Reading or writing one of the files failed.
    """
    targets = [os.path.join(target_dir, os.path.basename(record.path)) for record in records]
    for record, target_path in zip(records, targets):
        # Opening the destination for writing would truncate the source
        if os.path.exists(target_path) and os.path.samefile(record.path, target_path):
            raise PipelineError(
                f"Cannot copy {record.path} onto itself. Source and target directory must differ"
            )
    prepare_target_dir(target_dir, force)

    copied = []
    for record, target_path in zip(records, targets):
        if not force and os.path.exists(target_path):
            print(f"Skipping existing file: {target_path}")
            continue

        try:
            with open(record.path, "rb") as original_file, open(target_path, "wb") as new_file:
                shutil.copyfileobj(original_file, new_file)
                byte_count = new_file.tell()
        except OSError as e:
            raise CopyError(f"Error copying file {record.path}: {e}") from e

        print(f"Copied: {target_path}")
        copied.append(replace(record, path=target_path, byte_count=byte_count))

    return copied
