from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pypdfium2 as pdfium
from weasyprint import CSS, HTML  # type: ignore[import]

SNAPSHOT_WIDTH = 720


def _page_css(width_px: int) -> CSS:
    return CSS(
        string=f"""
        @page {{ size: {width_px}px auto; margin: 0; }}
        html, body {{ width: {width_px}px; background: #ffffff; }}
        .lookup {{ display: none; }}
        """
    )


def render_png(html: str, output_path: Path, width_px: int = SNAPSHOT_WIDTH) -> Path:
    """Snapshot the lookup page (without the input row) as a PNG."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pdf_bytes = HTML(string=html).write_pdf(stylesheets=[_page_css(width_px)])
    pdf = pdfium.PdfDocument(BytesIO(pdf_bytes))
    try:
        page = pdf[0]
        try:
            width_pts = page.get_width()
            bitmap = page.render(scale=width_px / width_pts if width_pts else 1.0)
            try:
                bitmap.to_pil().save(output_path, format="PNG")
            finally:
                bitmap.close()
        finally:
            page.close()
    finally:
        pdf.close()
    return output_path
