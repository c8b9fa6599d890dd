"""Page-flowing helper around the reportlab canvas.

Both PDF writers draw top to bottom with a y cursor. PdfDocument keeps that
cursor, starts a new page when a block would run past the bottom margin and
counts the pages it produced.
"""

import io
import logging
from typing import List

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.units import inch
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

LEFT_MARGIN = 0.75 * inch
RIGHT_MARGIN = 0.75 * inch
TOP_MARGIN = 0.75 * inch
BOTTOM_MARGIN = 0.75 * inch

FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
LINE_HEIGHT = 14


class PdfDocument:
    """A letter-size document drawn with a moving cursor.

    Attributes:
        width: Page width in points
        height: Page height in points
        y: Current baseline position (decreases while drawing)
        page_count: Pages started so far
    """

    def __init__(self, title: str = ""):
        self.buffer = io.BytesIO()
        self.canvas = canvas.Canvas(self.buffer, pagesize=LETTER)
        if title:
            self.canvas.setTitle(title)
        self.width, self.height = LETTER
        self.y = self.height - TOP_MARGIN
        self.page_count = 1
        self._font = (FONT, 10)
        self.canvas.setFont(*self._font)

    @property
    def left(self) -> float:
        return LEFT_MARGIN

    @property
    def right(self) -> float:
        return self.width - RIGHT_MARGIN

    @property
    def content_width(self) -> float:
        return self.right - self.left

    def set_font(self, size: float = 10, bold: bool = False) -> None:
        self._font = (BOLD_FONT if bold else FONT, size)
        self.canvas.setFont(*self._font)

    def new_page(self) -> None:
        """Finish the current page and continue at the top of the next."""
        self.canvas.showPage()
        self.page_count += 1
        self.y = self.height - TOP_MARGIN
        self.canvas.setFont(*self._font)
        logger.debug(f"Started page {self.page_count}")

    def ensure_space(self, needed: float) -> None:
        """Start a new page if ``needed`` points would cross the bottom margin."""
        if self.y - needed < BOTTOM_MARGIN:
            self.new_page()

    def text(self, value: str, indent: float = 0, line_height: float = LINE_HEIGHT):
        """Draw one line at the cursor and move down."""
        self.ensure_space(line_height)
        self.canvas.drawString(self.left + indent, self.y, value)
        self.y -= line_height

    def text_pair(self, left: str, right: str, indent: float = 0) -> None:
        """Draw a left-aligned label and a right-aligned value on one line."""
        self.ensure_space(LINE_HEIGHT)
        self.canvas.drawString(self.left + indent, self.y, left)
        self.canvas.drawRightString(self.right, self.y, right)
        self.y -= LINE_HEIGHT

    def columns(self, cells: List[str], positions: List[float]) -> None:
        """Draw a table row.

        The first cell is left-aligned at its position; the others are
        right-aligned so that numbers line up.
        """
        self.ensure_space(LINE_HEIGHT)
        for index, (cell, x) in enumerate(zip(cells, positions)):
            if index == 0:
                self.canvas.drawString(x, self.y, cell)
            else:
                self.canvas.drawRightString(x, self.y, cell)
        self.y -= LINE_HEIGHT

    def wrapped(self, value: str, indent: float = 0) -> None:
        """Draw a paragraph wrapped to the content width."""
        font_name, font_size = self._font
        for line in simpleSplit(
            value, font_name, font_size, self.content_width - indent
        ):
            self.text(line, indent=indent)

    def rule(self, gap: float = 6) -> None:
        """Draw a horizontal line across the content width."""
        self.ensure_space(gap * 2)
        self.y -= gap / 2
        self.canvas.line(self.left, self.y, self.right, self.y)
        self.y -= gap

    def space(self, amount: float = LINE_HEIGHT / 2) -> None:
        self.y -= amount

    def finish(self) -> bytes:
        """Close the document and return the PDF bytes."""
        self.canvas.showPage()
        self.canvas.save()
        return self.buffer.getvalue()
