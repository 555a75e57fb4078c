from datetime import datetime
from types import SimpleNamespace

import pytest

from app.helpers.errors import NothingToExportError
from app.helpers.grading import derive_grade, grade_color, performance_ratio
from app.helpers.report_generator import (
    BAR_MAX_WIDTH,
    PAGE_LIMIT,
    PAGE_TOP,
    BarItem,
    TextItem,
    generate_report,
    group_marks,
    layout_report,
)

GENERATED_AT = datetime(2025, 9, 18, 16, 44, 40)


def mark(name, score, class_name="10th", section="A"):
    return SimpleNamespace(student_name=name, marks=score, class_name=class_name, section=section)


@pytest.mark.parametrize("score, grade", [
    (100, "A+"), (90, "A+"), (89, "A"), (80, "A"), (79, "B"), (70, "B"),
    (69, "C"), (60, "C"), (59, "F"), (0, "F"),
])
def test_grade_boundaries(score, grade):
    assert derive_grade(score) == grade


def test_grade_colors_are_distinct():
    colors = {grade_color(g) for g in ("A+", "A", "B", "C", "F")}
    assert len(colors) == 5


def test_performance_ratio():
    assert performance_ratio(0) == 0
    assert performance_ratio(85) == 0.85
    assert performance_ratio(100) == 1


def test_groups_keep_first_seen_order():
    marks = [
        mark("Ravi", 70, "9th", "B"),
        mark("Asha", 95, "10th", "A"),
        mark("Kiran", 40, "9th", "B"),
        mark("Meena", 81, "6th", "C"),
    ]
    groups = group_marks(marks)

    assert list(groups) == ["Class 9th - Section B", "Class 10th - Section A", "Class 6th - Section C"]
    assert [m.student_name for m in groups["Class 9th - Section B"]] == ["Ravi", "Kiran"]


def test_empty_report_is_rejected():
    with pytest.raises(NothingToExportError):
        layout_report([])
    with pytest.raises(NothingToExportError):
        generate_report([])


def test_row_contents():
    pages = layout_report([mark("Asha", 85)], GENERATED_AT)
    texts = [item.text for item in pages[0] if isinstance(item, TextItem)]
    bars = [item for item in pages[0] if isinstance(item, BarItem)]

    assert texts[:2] == ["Student Results Report", "Generated on: 2025-09-18 16:44:40"]
    assert "Class 10th - Section A" in texts
    assert texts[-3:] == ["Asha", "85", "A"]
    assert len(bars) == 1
    assert bars[0].width == pytest.approx(BAR_MAX_WIDTH * 0.85)
    assert bars[0].color == grade_color("A")


def test_long_group_spills_onto_new_page():
    marks = [mark(f"Student {i}", 50 + i % 50) for i in range(30)]
    pages = layout_report(marks, GENERATED_AT)

    assert len(pages) == 2
    rows = [[item for item in page if isinstance(item, BarItem)] for page in pages]
    assert len(rows[0]) + len(rows[1]) == 30
    assert rows[1][0].y == PAGE_TOP
    for page in pages:
        assert all(item.y <= PAGE_LIMIT for item in page)


def test_group_header_is_never_left_alone_at_page_bottom():
    # first group fills page one almost to the limit
    marks = [mark(f"A{i}", 75) for i in range(23)] + [mark("Ravi", 65, "9th", "B")]
    pages = layout_report(marks, GENERATED_AT)

    header_pages = [
        index for index, page in enumerate(pages)
        for item in page if isinstance(item, TextItem) and item.text == "Class 9th - Section B"
    ]
    ravi_pages = [
        index for index, page in enumerate(pages)
        for item in page if isinstance(item, TextItem) and item.text == "Ravi"
    ]
    assert header_pages == ravi_pages == [1]


def test_generate_report_returns_pdf():
    pdf = generate_report([mark("Asha", 92), mark("Ravi", 58, "9th", "B")], GENERATED_AT)
    assert pdf.startswith(b"%PDF")


def test_group_header_needs_room_for_its_first_row():
    # twenty rows leave the cursor at 245; header, headings, rule and one row need 28 more
    marks = [mark(f"A{i}", 75) for i in range(20)] + [mark("Ravi", 65, "9th", "B")]
    pages = layout_report(marks, GENERATED_AT)

    header = [
        (index, item.y) for index, page in enumerate(pages)
        for item in page if isinstance(item, TextItem) and item.text == "Class 9th - Section B"
    ]
    assert header == [(1, PAGE_TOP)]
