"""
Student results report.

Marks are grouped by class and section, each row carrying the student's
name, score, derived grade and a bar scaled to the score. Layout is computed
first as positioned items on pages (cursor in mm from the top edge) and then
drawn with reportlab, so pagination can be checked without parsing a PDF.
"""

from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import Iterable, Optional, Union

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from app.helpers.errors import NothingToExportError
from app.helpers.grading import derive_grade, grade_color, performance_ratio
from app.helpers.logger import get_logger

logger = get_logger()

PAGE_TOP = 20
PAGE_LIMIT = 270

LEFT_X = 20
MARKS_X = 100
GRADE_X = 125
BAR_X = 145
RIGHT_X = 190
BAR_MAX_WIDTH = RIGHT_X - BAR_X
BAR_HEIGHT = 4

TITLE_STEP = 15
GENERATED_STEP = 20
GROUP_HEADER_STEP = 10
COLUMN_HEADER_STEP = 8
RULE_STEP = 2
ROW_STEP = 8
GROUP_GAP = 10

# header, column headings and rule, plus the first row
HEADER_RESERVATION = GROUP_HEADER_STEP + COLUMN_HEADER_STEP + RULE_STEP + ROW_STEP

BAR_TRACK_COLOR = "#e5e7eb"


@dataclass(frozen=True)
class TextItem:
    x: float
    y: float
    text: str
    size: int = 10
    bold: bool = False


@dataclass(frozen=True)
class RuleItem:
    x1: float
    x2: float
    y: float


@dataclass(frozen=True)
class BarItem:
    x: float
    y: float
    width: float
    color: str


LayoutItem = Union[TextItem, RuleItem, BarItem]


def group_key(class_name: str, section: str) -> str:
    return f"Class {class_name} - Section {section}"


def group_marks(marks: Iterable) -> dict[str, list]:
    """Partition marks by class/section, keeping first-seen group order."""
    groups: dict[str, list] = {}
    for mark in marks:
        groups.setdefault(group_key(mark.class_name, mark.section), []).append(mark)
    return groups


class _Pages:
    def __init__(self):
        self.pages: list[list[LayoutItem]] = [[]]
        self.y = PAGE_TOP

    def add(self, item: LayoutItem):
        self.pages[-1].append(item)

    def new_page(self):
        self.pages.append([])
        self.y = PAGE_TOP


def layout_report(marks: list, generated_at: Optional[datetime] = None) -> list[list[LayoutItem]]:
    if not marks:
        raise NothingToExportError("No marks available to export.")

    generated_at = generated_at or datetime.now()
    out = _Pages()

    out.add(TextItem(LEFT_X, out.y, "Student Results Report", size=20, bold=True))
    out.y += TITLE_STEP
    out.add(TextItem(LEFT_X, out.y, f"Generated on: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}", size=12))
    out.y += GENERATED_STEP

    for group, group_rows in group_marks(marks).items():
        if out.y + HEADER_RESERVATION > PAGE_LIMIT:
            out.new_page()

        out.add(TextItem(LEFT_X, out.y, group, size=14, bold=True))
        out.y += GROUP_HEADER_STEP

        out.add(TextItem(LEFT_X, out.y, "Student Name", bold=True))
        out.add(TextItem(MARKS_X, out.y, "Marks", bold=True))
        out.add(TextItem(GRADE_X, out.y, "Grade", bold=True))
        out.add(TextItem(BAR_X, out.y, "Performance", bold=True))
        out.y += COLUMN_HEADER_STEP

        out.add(RuleItem(LEFT_X, RIGHT_X, out.y - RULE_STEP))
        out.y += RULE_STEP

        for mark in group_rows:
            if out.y > PAGE_LIMIT:
                out.new_page()

            grade = derive_grade(mark.marks)
            out.add(TextItem(LEFT_X, out.y, mark.student_name))
            out.add(TextItem(MARKS_X, out.y, str(mark.marks)))
            out.add(TextItem(GRADE_X, out.y, grade))
            out.add(BarItem(BAR_X, out.y, BAR_MAX_WIDTH * performance_ratio(mark.marks), grade_color(grade)))
            out.y += ROW_STEP

        out.y += GROUP_GAP

    return out.pages


def _draw(pdf: canvas.Canvas, item: LayoutItem, page_height: float):
    # layout y grows downwards from the top edge, reportlab y grows upwards
    y = page_height - item.y * mm
    if isinstance(item, TextItem):
        pdf.setFont("Helvetica-Bold" if item.bold else "Helvetica", item.size)
        pdf.setFillColor(HexColor("#1a1a1a"))
        pdf.drawString(item.x * mm, y, item.text)
    elif isinstance(item, RuleItem):
        pdf.setStrokeColor(HexColor("#333333"))
        pdf.line(item.x1 * mm, y, item.x2 * mm, y)
    elif isinstance(item, BarItem):
        bar_y = y - 1 * mm
        pdf.setFillColor(HexColor(BAR_TRACK_COLOR))
        pdf.rect(item.x * mm, bar_y, BAR_MAX_WIDTH * mm, BAR_HEIGHT * mm, stroke=0, fill=1)
        if item.width > 0:
            pdf.setFillColor(HexColor(item.color))
            pdf.rect(item.x * mm, bar_y, item.width * mm, BAR_HEIGHT * mm, stroke=0, fill=1)


def generate_report(marks: list, generated_at: Optional[datetime] = None) -> bytes:
    """
    Render the results report as PDF bytes.

    Raises NothingToExportError when there are no marks.
    """
    pages = layout_report(marks, generated_at)

    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle("Student Results Report")
    _, page_height = A4

    for index, items in enumerate(pages):
        if index:
            pdf.showPage()
        for item in items:
            _draw(pdf, item, page_height)
    pdf.save()

    logger.info(f"Report generated: {len(marks)} marks, {len(pages)} page(s)")
    return buffer.getvalue()
