"""Unit tests for resume data structures and collection specs."""

from datetime import date

import pytest

from folio.contexts.editing.data_structures import (
    COLLECTIONS,
    Experience,
    Resume,
    ResumeAggregate,
    Skill,
    get_collection,
    parse_date,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        ("", None),
        ("2024-03-01", date(2024, 3, 1)),
        ("2024-03-01T00:00:00.000Z", date(2024, 3, 1)),
        (date(2020, 1, 15), date(2020, 1, 15)),
    ],
)
def test_parse_date(value, expected):
    assert parse_date(value) == expected


@pytest.mark.unit
def test_parse_date_rejects_garbage():
    with pytest.raises(ValueError):
        parse_date("last spring")


@pytest.mark.unit
def test_to_columns_converts_dates_and_booleans():
    spec = get_collection("experience")
    columns = spec.to_columns(
        {"company": "Acme", "start_date": "2021-06-01", "end_date": "", "current": True}
    )

    assert columns == {
        "company": "Acme",
        "start_date": "2021-06-01",
        "end_date": None,
        "current": 1,
    }


@pytest.mark.unit
def test_to_columns_rejects_unknown_fields():
    with pytest.raises(ValueError, match="Unknown skill field"):
        get_collection("skill").to_columns({"level": "expert"})


@pytest.mark.unit
def test_unknown_collection():
    with pytest.raises(ValueError, match="Unknown collection"):
        get_collection("awards")


@pytest.mark.unit
def test_row_values_round_trips_editable_fields():
    exp = Experience(
        id="e1",
        resume_id="r1",
        company="Acme",
        position="Engineer",
        start_date=date(2020, 1, 1),
        current=True,
        sort_order=4,
    )
    values = COLLECTIONS["experience"].row_values(exp)

    assert values["start_date"] == "2020-01-01"
    assert values["current"] == 1
    assert "id" not in values and "sort_order" not in values


@pytest.mark.unit
def test_aggregate_items_by_kind():
    resume = Resume(id="r1", owner_id="u1", title="CV", created_at="t", updated_at="t")
    skills = [Skill(id="s1", resume_id="r1", name="Python")]
    aggregate = ResumeAggregate(resume=resume, skills=skills)

    assert aggregate.items("skill") is skills
    assert aggregate.items("experience") == []
    assert aggregate.id == "r1"
    assert aggregate.title == "CV"
