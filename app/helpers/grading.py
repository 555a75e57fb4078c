from app.helpers.errors import ValidationError

MIN_MARKS = 0
MAX_MARKS = 100

# (inclusive lower bound, grade), highest first
GRADE_BOUNDARIES = (
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
)
FAILING_GRADE = "F"

GRADE_COLORS = {
    "A+": "#22c55e",  # green
    "A": "#3b82f6",   # blue
    "B": "#eab308",   # yellow
    "C": "#f97316",   # orange
    "F": "#ef4444",   # red
}


def derive_grade(score: int) -> str:
    for lower_bound, grade in GRADE_BOUNDARIES:
        if score >= lower_bound:
            return grade
    return FAILING_GRADE


def grade_color(grade: str) -> str:
    return GRADE_COLORS[grade]


def performance_ratio(score: int) -> float:
    """Fraction of the full bar filled for a score."""
    return score / MAX_MARKS


def validate_score(value) -> int:
    """
    Accepts an int or a string holding an int, within [0, 100].
    Raises ValidationError naming the `marks` field otherwise.
    """
    message = f"Please enter marks between {MIN_MARKS} and {MAX_MARKS}."

    if isinstance(value, bool):
        raise ValidationError({"marks": message})
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError({"marks": message})
    if not isinstance(value, int):
        raise ValidationError({"marks": message})
    if value < MIN_MARKS or value > MAX_MARKS:
        raise ValidationError({"marks": message})
    return value
