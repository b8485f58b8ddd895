import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

JOB_DESCRIPTION = (
    "We are hiring a Senior Python Developer to join our platform team. "
    "Responsibilities include designing APIs, reviewing code and mentoring engineers. "
    "Requirements: five years of experience with Python and PostgreSQL. "
    "The role is remote friendly and the salary is competitive."
)


@pytest.fixture()
def job_description() -> str:
    return JOB_DESCRIPTION


@pytest.fixture()
def job_description_pdf_bytes() -> bytes:
    """Generate a single-page PDF holding a short job posting."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Senior Python Developer")
    c.drawString(72, 700, "Join our team and build reliable backend services.")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one responsibilities")
    c.showPage()
    c.drawString(72, 720, "Page two requirements")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()
