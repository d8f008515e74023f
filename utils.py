"""Shared utility helpers for the PDF page numbering tool."""


def is_even(number: int) -> bool:
    """Return True if ``number`` is divisible by two."""
    return number % 2 == 0


def ensure_pdf_suffix(filename: str) -> str:
    """Append ``.pdf`` to a file name that lacks it.

    Args:
        filename: File name as supplied by the user, e.g. ``merged``.

    Returns:
        The file name ending in ``.pdf`` (case-insensitive check).
    """
    if filename.lower().endswith(".pdf"):
        return filename
    return f"{filename}.pdf"
