import uuid

import pytest
from sqlalchemy import func, select

from app.helpers.errors import NotFoundError, ValidationError
from app.helpers.grading import validate_score
from app.models import Mark
from app.services.marks import get_mark, list_marks, set_mark
from app.services.submissions import create_submission


@pytest.fixture
async def submission(db, blob_store):
    return await create_submission(db, blob_store, "Asha", "10th", "A", "hw1.py", b"print(1)")


async def count_marks(db):
    return (await db.execute(select(func.count(Mark.id)))).scalar_one()


async def test_set_mark_twice_keeps_one_record(db, submission):
    await set_mark(db, submission.id, 85)
    await set_mark(db, submission.id, 85)

    assert await count_marks(db) == 1
    assert (await get_mark(db, submission.id)).marks == 85


async def test_last_write_wins(db, submission):
    await set_mark(db, submission.id, 72)
    assert (await get_mark(db, submission.id)).marks == 72

    first_written = (await get_mark(db, submission.id)).created_at
    await set_mark(db, submission.id, 90)
    mark = await get_mark(db, submission.id)

    assert mark.marks == 90
    assert mark.created_at >= first_written
    assert await count_marks(db) == 1


async def test_mark_copies_submission_details(db, submission):
    mark = await set_mark(db, submission.id, "64")

    assert mark.marks == 64
    assert (mark.student_name, mark.class_name, mark.section) == ("Asha", "10th", "A")


@pytest.mark.parametrize("bad", [-1, 101, 85.5, "eighty", "", None, True])
async def test_invalid_score_writes_nothing(db, submission, bad):
    with pytest.raises(ValidationError) as exc_info:
        await set_mark(db, submission.id, bad)

    assert exc_info.value.errors == {"marks": "Please enter marks between 0 and 100."}
    assert await count_marks(db) == 0


@pytest.mark.parametrize("value, expected", [(0, 0), (100, 100), (" 42 ", 42), ("7", 7)])
def test_validate_score_accepts_integers(value, expected):
    assert validate_score(value) == expected


async def test_unknown_submission(db):
    with pytest.raises(NotFoundError):
        await set_mark(db, uuid.uuid4(), 50)
    assert await get_mark(db, uuid.uuid4()) is None


async def test_list_marks_filters(db, blob_store):
    a = await create_submission(db, blob_store, "Asha", "10th", "A", "hw1.py", b"1")
    b = await create_submission(db, blob_store, "Ravi", "10th", "B", "hw1.py", b"2")
    c = await create_submission(db, blob_store, "Meena", "9th", "A", "hw1.py", b"3")
    for sub, score in ((a, 91), (b, 55), (c, 78)):
        await set_mark(db, sub.id, score)

    assert len(await list_marks(db)) == 3
    assert {m.student_name for m in await list_marks(db, class_name="10th")} == {"Asha", "Ravi"}
    assert [m.student_name for m in await list_marks(db, class_name="10th", section="B")] == ["Ravi"]
    assert {m.student_name for m in await list_marks(db, section="A")} == {"Asha", "Meena"}
