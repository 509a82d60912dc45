"""
Pytest configuration and shared fixtures.
"""

import pytest
from io import BytesIO
from pathlib import Path
from typing import List

from pypdf import PdfWriter

from resumescore.database import get_session_factory, init_database
from resumescore.env import Settings
from resumescore.logger import get_logger, reset_logger
from resumescore.models import RawDocument
from pipelines.matching.orchestrator import ResumePipeline
from storage.repositories.openings import OpeningRepository
from storage.repositories.profiles import ProfileRepository


TENANT = "tenant-a"
OTHER_TENANT = "tenant-b"
OPENING_ID = "opening-1"
USER_ID = "user-1"


def build_text_pdf(lines: List[str]) -> bytes:
    """Minimal single-page PDF with one Helvetica text line per entry."""
    stream = "BT /F1 12 Tf 14 TL 72 720 Td " + " ".join(f"({line}) Tj T*" for line in lines) + " ET"
    stream_bytes = stream.encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
        b"<< /Length %d >>\nstream\n" % len(stream_bytes) + stream_bytes + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(out.tell())
        out.write(b"%d 0 obj\n" % number + body + b"\nendobj\n")

    xref_offset = out.tell()
    out.write(b"xref\n0 %d\n" % (len(objects) + 1))
    out.write(b"0000000000 65535 f \n")
    for offset in offsets:
        out.write(b"%010d 00000 n \n" % offset)
    out.write(b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1))
    out.write(b"startxref\n%d\n%%%%EOF\n" % xref_offset)
    return out.getvalue()


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Fresh global logger per test, writing only to a temporary log dir."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def sample_resume_text() -> str:
    """Plain-text résumé with explicit experience, a labelled location and a degree."""
    return """Jane Doe
Senior Software Engineer
Location: Bangalore
Email: jane@example.com

Summary
Backend engineer with 6+ years of experience building REST APIs and microservices.

Skills
Python, Django, PostgreSQL, Docker, Kubernetes, AWS, React.js

Experience
Acme Corp, Senior Engineer, Jan 2019 - Present
Globex, Engineer, Jun 2016 - Dec 2018

Education
B.Tech in Computer Science, 2016
"""


@pytest.fixture
def text_pdf_bytes() -> bytes:
    return build_text_pdf([
        "Jane Doe",
        "Location: Bangalore",
        "Backend engineer with 6+ years of experience",
        "Skills: Python, Django, PostgreSQL",
        "B.Tech in Computer Science",
    ])


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    """Image-only stand-in: a PDF page with no text layer."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def db_path(tmp_path) -> Path:
    path = tmp_path / "test.db"
    init_database(path)
    return path


@pytest.fixture
def session_factory(db_path):
    return get_session_factory(db_path)


@pytest.fixture
def opening_repo(session_factory) -> OpeningRepository:
    return OpeningRepository(session_factory)


@pytest.fixture
def profile_repo(session_factory) -> ProfileRepository:
    return ProfileRepository(session_factory)


@pytest.fixture
def seeded_opening(opening_repo):
    """Backend opening owned by TENANT."""
    return opening_repo.create_opening(
        tenant_id=TENANT,
        title="Backend Engineer",
        required_skills=["Python", "Django", "PostgreSQL", "Go"],
        required_experience=5,
        location="Bangalore",
        department="Engineering",
        opening_id=OPENING_ID,
    )


@pytest.fixture
def pipeline(opening_repo, profile_repo, seeded_opening, isolated_logger) -> ResumePipeline:
    return ResumePipeline(opening_repo, profile_repo, settings=Settings(), logger=isolated_logger)


@pytest.fixture
def resume_document(sample_resume_text) -> RawDocument:
    return RawDocument(
        content=sample_resume_text.encode("utf-8"),
        content_type="text/plain",
        filename="resume.txt",
    )
