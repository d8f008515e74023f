import argparse

import pytest
from fpdf import FPDF


def write_pdf(path, page_count: int):
    """Write a simple A4 PDF with one line of text per page."""
    pdf = FPDF()
    pdf.set_margins(10, 10, 10)
    for index in range(page_count):
        pdf.add_page()
        pdf.set_font("helvetica", size=12)
        pdf.cell(0, 10, text=f"{path.stem} body {index + 1}")
    pdf.output(str(path))
    return path


@pytest.fixture
def make_pdf():
    return write_pdf


@pytest.fixture
def parse_args():
    from minion import build_parser

    def _parse(*argv: str) -> argparse.Namespace:
        return build_parser().parse_args(list(argv))

    return _parse
