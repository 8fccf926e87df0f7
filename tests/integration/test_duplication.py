"""Integration tests for resume duplication through ResumeService."""

from datetime import date

import pytest

from folio.contexts.editing import RESUME_LIST_VIEW, ActionError


def _populated_resume(service) -> str:
    """Resume with contact, summary, 3 experiences, 2 degrees, 5 skills and 1 project."""
    resume_id = service.create_resume().resume_id
    service.rename_resume(resume_id, "Backend")
    service.update_contact_info(resume_id, full_name="Ada Lovelace", email="ada@example.com")
    service.update_summary(resume_id, "Engineer who ships.")

    for i, company in enumerate(["Acme", "Globex", "Initech"]):
        service.add_experience(
            resume_id,
            company=company,
            position=f"Engineer {i}",
            start_date=date(2018 + i, 1, 1),
            current=(i == 2),
        )
    service.add_education(resume_id, institution="MIT", degree="BSc", field="Physics")
    service.add_education(resume_id, institution="UCL", degree="MSc")
    for name in ["Python", "SQL", "Go", "Rust", "Docker"]:
        service.add_skill(resume_id, name)
    service.add_project(resume_id, name="Compiler", url="https://x.dev")
    return resume_id


def _duplicate_title(service, resume_id) -> str:
    result = service.duplicate_resume(resume_id)
    assert result.success
    return service.get_resume(result.resume_id).title


@pytest.mark.integration
def test_first_duplicate_is_named_copy(service):
    resume_id = service.create_resume().resume_id
    service.rename_resume(resume_id, "Resume")

    assert _duplicate_title(service, resume_id) == "Resume (Copy)"


@pytest.mark.integration
def test_repeated_duplicates_are_numbered_without_repeats(service):
    resume_id = service.create_resume().resume_id
    service.rename_resume(resume_id, "X")

    titles = [_duplicate_title(service, resume_id) for _ in range(4)]

    assert titles == ["X (Copy)", "X (Copy 2)", "X (Copy 3)", "X (Copy 4)"]


@pytest.mark.integration
def test_duplicating_a_copy_continues_the_sequence(service):
    resume_id = service.create_resume().resume_id
    service.rename_resume(resume_id, "X")
    copy_id = service.duplicate_resume(resume_id).resume_id

    assert _duplicate_title(service, copy_id) == "X (Copy 2)"


@pytest.mark.integration
def test_titles_of_other_owners_are_ignored(service, other_service):
    theirs = other_service.create_resume().resume_id
    other_service.rename_resume(theirs, "Resume (Copy 7)")

    mine = service.create_resume().resume_id
    service.rename_resume(mine, "Resume")

    assert _duplicate_title(service, mine) == "Resume (Copy)"


@pytest.mark.integration
def test_duplicate_is_a_deep_copy(service):
    source_id = _populated_resume(service)

    copy_id = service.duplicate_resume(source_id).resume_id
    source = service.get_resume(source_id)
    copy = service.get_resume(copy_id)

    assert copy_id != source_id
    assert copy.title == "Backend (Copy)"
    assert copy.contact_info.full_name == "Ada Lovelace"
    assert copy.contact_info.resume_id == copy_id
    assert copy.summary.content == "Engineer who ships."

    for kind, expected_count in [("experience", 3), ("education", 2), ("skill", 5), ("project", 1)]:
        originals = source.items(kind)
        clones = copy.items(kind)
        assert len(clones) == expected_count

        for original, clone in zip(originals, clones):
            assert clone.id != original.id
            assert clone.resume_id == copy_id
            assert clone.sort_order == original.sort_order
            comparable = {**vars(clone), "id": original.id, "resume_id": original.resume_id}
            assert comparable == vars(original)


@pytest.mark.integration
def test_editing_the_copy_leaves_the_original_alone(service):
    source_id = _populated_resume(service)
    copy_id = service.duplicate_resume(source_id).resume_id
    copy = service.get_resume(copy_id)

    service.update_experience(copy.experiences[0].id, copy_id, company="Changed")
    service.delete_skill(copy.skills[0].id, copy_id)
    service.update_contact_info(copy_id, full_name="Someone Else")
    service.update_summary(copy_id, "Different.")

    source = service.get_resume(source_id)
    assert source.experiences[0].company == "Acme"
    assert len(source.skills) == 5
    assert source.contact_info.full_name == "Ada Lovelace"
    assert source.summary.content == "Engineer who ships."


@pytest.mark.integration
def test_item_ids_of_copy_do_not_resolve_against_original(service):
    source_id = _populated_resume(service)
    copy_id = service.duplicate_resume(source_id).resume_id
    copy_skill = service.get_resume(copy_id).skills[0]

    assert service.delete_skill(copy_skill.id, source_id).error is ActionError.NOT_FOUND


@pytest.mark.integration
def test_duplicate_of_resume_without_summary(service):
    source_id = service.create_resume().resume_id

    copy = service.get_resume(service.duplicate_resume(source_id).resume_id)

    assert copy.title == "Untitled Resume (Copy)"
    assert copy.summary is None
    assert copy.contact_info is not None


@pytest.mark.integration
def test_duplicate_foreign_or_missing_resume(service, other_service):
    resume_id = service.create_resume().resume_id

    assert other_service.duplicate_resume(resume_id).error is ActionError.NOT_FOUND
    assert service.duplicate_resume("missing").error is ActionError.NOT_FOUND
    assert len(service.list_resumes()) == 1


@pytest.mark.integration
def test_duplicate_invalidates_resume_list(service, invalidator):
    resume_id = service.create_resume().resume_id
    invalidator.clear()

    service.duplicate_resume(resume_id)

    assert invalidator.views == [RESUME_LIST_VIEW]


@pytest.mark.integration
def test_failed_duplicate_rolls_back(service, store, monkeypatch):
    source_id = _populated_resume(service)

    def fail(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(store, "upsert_summary", fail)

    with pytest.raises(RuntimeError):
        service.duplicate_resume(source_id)

    assert [listing.id for listing in service.list_resumes()] == [source_id]
    assert store.query("SELECT COUNT(*) AS count FROM contact_info")[0]["count"] == 1
