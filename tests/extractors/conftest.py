"""Shared pytest fixtures building real office documents in memory."""

from __future__ import annotations

import io

import pandas as pd
import pymupdf
import pytest
from docx import Document


@pytest.fixture
def pdf_bytes() -> bytes:
    """Return a small text PDF generated with PyMuPDF."""

    doc = pymupdf.open()
    page = doc.new_page()
    lines = [
        "Quarterly revenue report for the Male branch office.",
        "Revenue grew by twelve percent compared with the previous quarter.",
        "Staff costs remained flat while rent increased slightly.",
    ]
    for index, line in enumerate(lines):
        page.insert_text((72, 72 + index * 20), line, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def docx_bytes() -> bytes:
    """Return a Word document with paragraphs and a table."""

    doc = Document()
    doc.add_heading("Employee Handbook", level=1)
    doc.add_paragraph("All staff are entitled to thirty days of annual leave.")
    table = doc.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Role"
    table.cell(0, 1).text = "Leave days"
    table.cell(1, 0).text = "Manager"
    table.cell(1, 1).text = "30"
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def xlsx_bytes() -> bytes:
    """Return a workbook with two sheets written through pandas/openpyxl."""

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pd.DataFrame({"Item": ["Rent", "Salaries"], "Amount": [1200, 5400]}).to_excel(
            writer, sheet_name="Budget", index=False
        )
        pd.DataFrame({"Month": ["Jan"], "Total": [6600]}).to_excel(
            writer, sheet_name="Summary", index=False
        )
    return buffer.getvalue()
