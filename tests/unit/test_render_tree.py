"""Unit tests for the render tree shaping rules shared by every adapter."""

from datetime import date

import pytest

from folio.contexts.editing.data_structures import (
    ContactInfo,
    Education,
    Experience,
    Project,
    Resume,
    ResumeAggregate,
    Skill,
    Summary,
)
from folio.contexts.rendering.render_tree import (
    build_render_tree,
    format_date,
    format_date_range,
)


def _aggregate(**parts) -> ResumeAggregate:
    resume = Resume(id="r1", owner_id="u1", title="My CV", created_at="t", updated_at="t")
    return ResumeAggregate(resume=resume, **parts)


@pytest.mark.unit
def test_empty_resume_has_placeholder_name_and_no_sections():
    tree = build_render_tree(_aggregate(contact_info=ContactInfo(resume_id="r1")))

    assert tree.name == "Your Name"
    assert tree.contact_items == []
    assert tree.links == []
    assert tree.sections == []


@pytest.mark.unit
def test_missing_contact_row_uses_placeholder():
    tree = build_render_tree(_aggregate())
    assert tree.name == "Your Name"
    assert tree.title == "My CV"


@pytest.mark.unit
def test_contact_line_order_and_bullets():
    contact = ContactInfo(
        resume_id="r1",
        full_name="Ada Lovelace",
        email="ada@example.com",
        phone="555-0100",
        location="London",
    )
    tree = build_render_tree(_aggregate(contact_info=contact))

    assert tree.name == "Ada Lovelace"
    assert tree.contact_line == "ada@example.com • 555-0100 • London"


@pytest.mark.unit
def test_contact_line_skips_missing_items():
    contact = ContactInfo(resume_id="r1", phone="555-0100", location="")
    tree = build_render_tree(_aggregate(contact_info=contact))

    assert tree.contact_items == ["• 555-0100"]


@pytest.mark.unit
def test_link_row_fixed_order_present_only():
    contact = ContactInfo(
        resume_id="r1",
        website="https://ada.dev",
        linkedin="https://linkedin.com/in/ada",
    )
    tree = build_render_tree(_aggregate(contact_info=contact))

    assert [(link.label, link.url) for link in tree.links] == [
        ("LinkedIn", "https://linkedin.com/in/ada"),
        ("Website", "https://ada.dev"),
    ]


@pytest.mark.unit
def test_empty_summary_is_omitted():
    tree = build_render_tree(_aggregate(summary=Summary(resume_id="r1", content="")))
    assert tree.section("summary") is None


@pytest.mark.unit
def test_sections_appear_in_fixed_order():
    tree = build_render_tree(
        _aggregate(
            summary=Summary(resume_id="r1", content="Engineer."),
            projects=[Project(id="p1", resume_id="r1", name="Engine")],
            skills=[Skill(id="s1", resume_id="r1", name="Python")],
            education=[Education(id="d1", resume_id="r1", institution="UCL", degree="BSc")],
            experiences=[Experience(id="e1", resume_id="r1", company="Acme", position="Dev")],
        )
    )

    assert [section.title for section in tree.sections] == [
        "Summary",
        "Experience",
        "Education",
        "Skills",
        "Projects",
    ]


@pytest.mark.unit
def test_current_experience_ignores_end_date():
    exp = Experience(
        id="e1",
        resume_id="r1",
        company="Acme",
        position="Engineer",
        location="Remote",
        start_date=date(2021, 1, 4),
        end_date=date(2022, 6, 30),
        current=True,
    )
    entry = build_render_tree(_aggregate(experiences=[exp])).section("experience").entries[0]

    assert entry.heading == "Engineer"
    assert entry.subtitle == "Acme, Remote"
    assert entry.date_range == "Jan 2021 - Present"


@pytest.mark.unit
def test_current_education_shows_present():
    edu = Education(
        id="d1",
        resume_id="r1",
        institution="MIT",
        degree="PhD",
        field="Physics",
        start_date=date(2019, 9, 1),
        end_date=date(2024, 5, 1),
        current=True,
    )
    entry = build_render_tree(_aggregate(education=[edu])).section("education").entries[0]

    assert entry.heading == "PhD in Physics"
    assert entry.subtitle == "MIT"
    assert entry.date_range == "Sep 2019 - Present"


@pytest.mark.unit
def test_blank_position_and_project_use_placeholders():
    tree = build_render_tree(
        _aggregate(
            experiences=[Experience(id="e1", resume_id="r1")],
            projects=[Project(id="p1", resume_id="r1", url="https://x.dev")],
        )
    )

    assert tree.section("experience").entries[0].heading == "Position"
    project = tree.section("projects").entries[0]
    assert project.heading == "Project"
    assert project.subtitle == "https://x.dev"
    assert project.date_range is None


@pytest.mark.unit
def test_skills_join_in_collection_order():
    skills = [
        Skill(id="s1", resume_id="r1", name="Python", sort_order=0),
        Skill(id="s2", resume_id="r1", name="SQL", sort_order=2),
        Skill(id="s3", resume_id="r1", name="Rust", sort_order=3),
    ]
    tree = build_render_tree(_aggregate(skills=skills))

    assert tree.section("skills").text == "Python, SQL, Rust"


@pytest.mark.unit
def test_format_date_helpers():
    assert format_date(None) == ""
    assert format_date(date(2024, 3, 9)) == "Mar 2024"
    assert format_date_range(date(2020, 1, 1), date(2021, 2, 1), False) == "Jan 2020 - Feb 2021"
    assert format_date_range(date(2020, 1, 1), None, False) == "Jan 2020 - "
    assert format_date_range(None, date(2021, 2, 1), True) == " - Present"
