import io
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest
from PIL import Image
from reportlab.pdfgen import canvas

# Add src to sys.path so we can import pleading_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from pleading_toolkit.builder.layout.fonts import FontMetrics, FontSet  # noqa: E402


@dataclass(frozen=True)
class FixedWidthMetrics(FontMetrics):
    """Every character is half the font size wide."""

    def width_of(self, text: str, size: float) -> float:
        return len(text) * size * 0.5


# Common test fixtures
@pytest.fixture
def fixed_fonts() -> FontSet:
    """Fonts with predictable widths: 79 characters fit a 12pt body line."""
    return FontSet(body=FixedWidthMetrics("Times-Roman"), bold=FixedWidthMetrics("Times-Bold"))


@pytest.fixture
def make_pdf():
    """Factory for small PDFs whose pages read 'Source page N'."""
    def _create(pages: int = 2, label: str = "Source page") -> bytes:
        buf = io.BytesIO()
        c = canvas.Canvas(buf, pagesize=(612, 792), invariant=1)
        for number in range(1, pages + 1):
            c.setFont("Helvetica", 14)
            c.drawString(100, 700, f"{label} {number}")
            c.showPage()
        c.save()
        return buf.getvalue()
    return _create


@pytest.fixture
def sample_png_bytes() -> bytes:
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
