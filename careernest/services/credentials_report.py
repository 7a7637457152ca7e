"""
Credentials Report
Renders bulk-created student credentials into a paginated PDF
"""

from datetime import datetime, timezone
from io import BytesIO
from typing import Iterable, List

import img2pdf
from PIL import Image, ImageDraw, ImageFont

# A4 at 150 DPI
PAGE_SIZE = (1240, 1754)
MARGIN = 80
ROW_HEIGHT = 34
HEADER_HEIGHT = 150

PRIMARY = (74, 144, 226)
TEXT = (44, 62, 80)
WARNING = (217, 83, 79)
MUTED = (102, 102, 102)

COLUMNS = [
    ("#", 50),
    ("Name", 250),
    ("Email", 300),
    ("Roll No.", 140),
    ("Password", 160),
    ("Course", 120),
    ("Year", 60),
]

INSTRUCTIONS = [
    "Instructions:",
    "1. Share these credentials with respective students securely.",
    "2. Students log in with their username, email or roll number and the given password.",
    "3. Students should change their password after first login.",
    "4. Keep this document confidential and secure.",
]


def _load_font(size: int) -> ImageFont.ImageFont:
    for candidate in ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf"):
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    return ImageFont.load_default()


def _fit(draw: ImageDraw.ImageDraw, text: str, font, width: int) -> str:
    """Truncate text with an ellipsis so it fits the column"""
    if draw.textlength(text, font=font) <= width:
        return text
    while text and draw.textlength(text + "...", font=font) > width:
        text = text[:-1]
    return text + "..."


def _row_values(index: int, credential: dict) -> List[str]:
    roll = credential.get("roll_number") or credential.get("rollNumber") or ""
    values = [
        index,
        credential.get("name"),
        credential.get("email"),
        roll,
        credential.get("password"),
        credential.get("course"),
        credential.get("year"),
    ]
    return ["" if value is None else str(value) for value in values]


class CredentialsReport:
    """Draws credential rows onto A4 page images and bundles them as a PDF"""

    def __init__(self, organization_name: str = "Organization", generated_at: datetime = None):
        self.organization_name = organization_name or "Organization"
        self.generated_at = generated_at or datetime.now(timezone.utc)
        self.title_font = _load_font(44)
        self.body_font = _load_font(20)
        self.bold_font = _load_font(22)

    def _new_page(self) -> Image.Image:
        return Image.new("RGB", PAGE_SIZE, "white")

    def _draw_banner(self, draw: ImageDraw.ImageDraw) -> int:
        width = PAGE_SIZE[0]
        draw.rectangle([(0, 0), (width, HEADER_HEIGHT)], fill=PRIMARY)
        lines = [
            ("CareerNest", self.title_font),
            ("Student Credentials Report", self.body_font),
            (f"Organization: {self.organization_name}", self.body_font),
        ]
        y = 20
        for text, font in lines:
            x = (width - draw.textlength(text, font=font)) // 2
            draw.text((x, y), text, fill="white", font=font)
            y += 56 if font is self.title_font else 30

        y = HEADER_HEIGHT + 20
        stamp = f"Generated: {self.generated_at.strftime('%Y-%m-%d %H:%M UTC')}"
        draw.text(((width - draw.textlength(stamp, font=self.body_font)) // 2, y), stamp, fill=TEXT, font=self.body_font)
        y += 30
        warning = "CONFIDENTIAL - Keep this document secure"
        draw.text(((width - draw.textlength(warning, font=self.bold_font)) // 2, y), warning, fill=WARNING, font=self.bold_font)
        return y + 50

    def _draw_table_header(self, draw: ImageDraw.ImageDraw, y: int) -> int:
        x = MARGIN
        for title, width in COLUMNS:
            draw.text((x, y), title, fill=PRIMARY, font=self.bold_font)
            x += width
        y += ROW_HEIGHT
        draw.line([(MARGIN, y - 6), (PAGE_SIZE[0] - MARGIN, y - 6)], fill=PRIMARY, width=2)
        return y

    def _draw_row(self, draw: ImageDraw.ImageDraw, y: int, values: List[str]) -> None:
        x = MARGIN
        for value, (_, width) in zip(values, COLUMNS):
            draw.text((x, y), _fit(draw, value, self.body_font, width - 10), fill=TEXT, font=self.body_font)
            x += width

    def render_pages(self, credentials: Iterable[dict]) -> List[Image.Image]:
        pages = [self._new_page()]
        draw = ImageDraw.Draw(pages[0])
        y = self._draw_table_header(draw, self._draw_banner(draw))
        bottom = PAGE_SIZE[1] - MARGIN

        for index, credential in enumerate(credentials, start=1):
            if y + ROW_HEIGHT > bottom:
                pages.append(self._new_page())
                draw = ImageDraw.Draw(pages[-1])
                y = self._draw_table_header(draw, MARGIN)
            self._draw_row(draw, y, _row_values(index, credential))
            y += ROW_HEIGHT

        y += ROW_HEIGHT
        if y + ROW_HEIGHT * len(INSTRUCTIONS) > bottom:
            pages.append(self._new_page())
            draw = ImageDraw.Draw(pages[-1])
            y = MARGIN
        for line in INSTRUCTIONS:
            draw.text((MARGIN, y), line, fill=MUTED, font=self.body_font)
            y += ROW_HEIGHT - 6

        return pages

    def render_pdf(self, credentials: Iterable[dict]) -> bytes:
        images = []
        for page in self.render_pages(credentials):
            buffer = BytesIO()
            page.save(buffer, format="PNG")
            images.append(buffer.getvalue())
        return img2pdf.convert(images)


def build_credentials_pdf(credentials: Iterable[dict], organization_name: str = "Organization") -> bytes:
    """Render credential dicts (name, email, roll_number, password, course, year) to PDF bytes"""
    return CredentialsReport(organization_name).render_pdf(list(credentials))
