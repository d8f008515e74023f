import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional

from pypdf import PdfReader, PdfWriter, Transformation
from pypdf.errors import PdfReadError, PyPdfError
from reportlab.pdfgen import canvas

# Errors a single PDF operation may raise; callers treat them per file.
PDF_ERRORS = (PyPdfError, OSError, ValueError)


@dataclass(frozen=True)
class Placement:
    """Where a stamp goes on the page.

    ``anchor`` is ``"bl"`` (bottom-left), ``"br"`` (bottom-right) or ``"c"``
    (centre). ``dx``/``dy`` are offsets in points from that anchor; negative
    ``dx`` moves left.
    """

    anchor: str
    dx: float = 0
    dy: float = 0

    def origin(self, width: float, height: float) -> tuple[float, float]:
        if self.anchor == "bl":
            return self.dx, self.dy
        if self.anchor == "br":
            return width + self.dx, self.dy
        if self.anchor == "c":
            return width / 2 + self.dx, height / 2 + self.dy
        raise ValueError(f"Unknown placement anchor: {self.anchor}")


@dataclass(frozen=True)
class StampStyle:
    """Font, colour and rotation of a stamp.

    ``fit_width`` shrinks the font so the text never exceeds that fraction of
    the page width.
    """

    font_name: str = "Helvetica"
    font_size: float = 16
    color: tuple[float, float, float] = (0.5, 0.5, 0.5)
    rotation: float = 0
    fit_width: Optional[float] = None


@dataclass(frozen=True)
class Stamp:
    text: str
    placement: Placement
    style: StampStyle = StampStyle()


def validate_structure(file_path: str) -> None:
    """Raise if ``file_path`` is not a PDF we can read and rewrite."""
    reader = PdfReader(file_path, strict=False)
    if reader.is_encrypted:
        raise PdfReadError(f"{file_path} is encrypted")
    # Resolve every page and its content stream; broken documents raise here
    for page in reader.pages:
        page.get_contents()


def count_pages(file_path: str) -> int:
    return len(PdfReader(file_path, strict=False).pages)


def insert_blank_page(file_path: str, after_page: int) -> None:
    """Insert one blank page after the 1-based page ``after_page``.

    The blank page gets the size of the page it follows.
    """
    writer = PdfWriter(clone_from=file_path)
    if not 1 <= after_page <= len(writer.pages):
        raise ValueError(f"{file_path} has no page {after_page}")
    box = writer.pages[after_page - 1].mediabox
    writer.insert_blank_page(width=box.width, height=box.height, index=after_page)
    _write_in_place(writer, file_path)


def stamp(file_path: str, pages: Iterable[int], text: str, placement: Placement, style: StampStyle) -> None:
    """Stamp the same text onto each of the 1-based ``pages``."""
    stamp_pages(file_path, {page: Stamp(text, placement, style) for page in pages})


def stamp_pages(file_path: str, stamps: Mapping[int, Stamp]) -> list[int]:
    """Burn one text stamp per page into ``file_path``.

    Args:
        file_path: PDF to modify in place.
        stamps: Map of 1-based page number to the stamp for that page.

    Returns:
        The page numbers that could not be stamped. Failures on single pages
        are logged and the remaining pages are still stamped.
    """
    writer = PdfWriter(clone_from=file_path)
    failed = []
    for page_number, page_stamp in sorted(stamps.items()):
        if not 1 <= page_number <= len(writer.pages):
            logging.error(f"Cannot stamp page {page_number} of {file_path}: no such page")
            failed.append(page_number)
            continue
        page = writer.pages[page_number - 1]
        try:
            width, height, transformation = page_geometry(page)
            overlay = _render_overlay(page_stamp, width, height)
            page.merge_transformed_page(overlay, transformation)
        except PDF_ERRORS as e:
            logging.error(f"Error stamping page {page_number} of {file_path}: {e}")
            failed.append(page_number)
    _write_in_place(writer, file_path)
    return failed


def page_geometry(page) -> tuple[float, float, Transformation]:
    """Size of ``page`` as a viewer shows it, honouring ``/Rotate``.

    Returns the displayed width and height, and the transformation that maps
    an upright overlay of that size onto the page's media box.
    """
    box = page.mediabox
    width, height = float(box.width), float(box.height)
    rotation = page.rotation % 360
    # Where the overlay origin lands after turning it by the page rotation
    offsets = {0: (0, 0), 90: (width, 0), 180: (width, height), 270: (0, height)}
    if rotation not in offsets:
        raise ValueError(f"Unsupported page rotation: {page.rotation}")
    dx, dy = offsets[rotation]
    transformation = Transformation().rotate(rotation).translate(float(box.left) + dx, float(box.bottom) + dy)
    if rotation in (90, 270):
        width, height = height, width
    return width, height, transformation


def merge_pdfs(file_paths: Iterable[str], output_path: str) -> None:
    """Concatenate ``file_paths`` in order into ``output_path``."""
    writer = PdfWriter()
    for file_path in file_paths:
        writer.append(file_path)
    with open(output_path, "wb") as f:
        writer.write(f)
    writer.close()


def _render_overlay(page_stamp: Stamp, width: float, height: float):
    style = page_stamp.style
    font_size = style.font_size

    packet = io.BytesIO()
    can = canvas.Canvas(packet, pagesize=(width, height))
    if style.fit_width:
        text_width = can.stringWidth(page_stamp.text, style.font_name, font_size)
        limit = width * style.fit_width
        if text_width > limit:
            font_size = font_size * limit / text_width
    can.setFont(style.font_name, font_size)
    can.setFillColorRGB(*style.color)

    x, y = page_stamp.placement.origin(width, height)
    can.saveState()
    can.translate(x, y)
    can.rotate(style.rotation)
    if page_stamp.placement.anchor == "br":
        can.drawRightString(0, 0, page_stamp.text)
    elif page_stamp.placement.anchor == "c":
        can.drawCentredString(0, -font_size / 3, page_stamp.text)
    else:
        can.drawString(0, 0, page_stamp.text)
    can.restoreState()
    can.save()

    packet.seek(0)
    return PdfReader(packet).pages[0]


def _write_in_place(writer: PdfWriter, file_path: str) -> None:
    # Write to temp then replace
    pdf_path = Path(file_path)
    temp_path = pdf_path.parent / f"minion_temp_{pdf_path.name}"
    try:
        with open(temp_path, "wb") as f:
            writer.write(f)
        temp_path.replace(pdf_path)
    finally:
        writer.close()
        if temp_path.exists():
            temp_path.unlink()
