"""
Pre-upload checks for a student submission.

All violations are collected in one pass so a form can show every error at
once instead of one per attempt.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from app import config

SIZE_UNITS = ("Bytes", "KB", "MB")


@dataclass(frozen=True)
class IntakeResult:
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def extension_of(filename: str) -> str:
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def format_file_size(num_bytes: int) -> str:
    """
    Human readable size, e.g. 1536 -> "1.5 KB".
    """
    if num_bytes <= 0:
        return "0 Bytes"
    k = 1024
    i = min(int(math.floor(math.log(num_bytes) / math.log(k))), len(SIZE_UNITS) - 1)
    value = round(num_bytes / math.pow(k, i), 2)
    # drop trailing ".0"
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[i]}"


def validate_intake(
    student_name: Optional[str],
    class_name: Optional[str],
    section: Optional[str],
    filename: Optional[str],
    size: Optional[int],
) -> IntakeResult:
    errors: dict[str, str] = {}

    if not (student_name or "").strip():
        errors["name"] = "Name is required"

    class_name = (class_name or "").strip()
    if not class_name:
        errors["class"] = "Class is required"
    elif class_name not in config.CLASS_OPTIONS:
        errors["class"] = f"Class must be one of: {', '.join(config.CLASS_OPTIONS)}"

    section = (section or "").strip()
    if not section:
        errors["section"] = "Section is required"
    elif section not in config.SECTION_OPTIONS:
        errors["section"] = f"Section must be one of: {', '.join(config.SECTION_OPTIONS)}"

    if not filename:
        errors["file"] = "Python file is required"
    else:
        if not filename.endswith(f".{config.ACCEPTED_EXTENSION}"):
            errors["file"] = "Only Python (.py) files are allowed"
        if size is not None and size > config.MAX_UPLOAD_BYTES:
            errors["size"] = "File size must be less than 5MB"

    return IntakeResult(errors=errors)
