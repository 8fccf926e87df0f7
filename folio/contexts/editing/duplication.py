"""
Resume Duplication

Builds an independent deep copy of a resume aggregate under a collision-free
"(Copy N)" title.

Title derivation:
    "Resume"            -> "Resume (Copy)"      (no existing copies)
    "Resume"            -> "Resume (Copy 2)"    ("Resume (Copy)" exists)
    "Resume (Copy 2)"   -> "Resume (Copy 3)"    (suffix stripped before scanning)

The highest existing copy number wins, so gaps left by deletes or renames are
never reused and no counter table is needed.
"""

import re
from typing import Dict, Iterable

from folio.contexts.editing.data_structures import (
    COLLECTIONS,
    CONTACT_FIELDS,
    ResumeAggregate,
)
from folio.contexts.editing.logger import log_duplication
from folio.contexts.editing.resume_store import ResumeStore

# ASCII digits only, anchored at the true end of the title (no trailing newline)
COPY_SUFFIX_PATTERN = re.compile(r" \(Copy( [0-9]+)?\)\Z")


def strip_copy_suffix(title: str) -> str:
    """
    Remove one trailing " (Copy)" or " (Copy N)" suffix.

    Example:
        >>> strip_copy_suffix("Resume (Copy 3)")
        'Resume'
        >>> strip_copy_suffix("Resume (Copy) (Copy)")
        'Resume (Copy)'
    """
    return COPY_SUFFIX_PATTERN.sub("", title, count=1)


def highest_copy_number(base_title: str, titles: Iterable[str]) -> int:
    """
    Highest N among titles of the exact form "{base_title} (Copy[ N])".

    A bare "(Copy)" counts as 1. Returns 0 when no title matches.
    """
    pattern = re.compile(rf"{re.escape(base_title)} \(Copy( ([0-9]+))?\)")
    highest = 0
    for title in titles:
        match = pattern.fullmatch(title)
        if match:
            number = int(match.group(2)) if match.group(2) else 1
            highest = max(highest, number)
    return highest


def next_copy_title(source_title: str, existing_titles: Iterable[str]) -> str:
    """
    Title for a new copy of `source_title`, given the owner's existing titles.

    Args:
        source_title: Title of the resume being duplicated
        existing_titles: Titles already owned by the same user

    Returns:
        "{base} (Copy)" for the first copy, "{base} (Copy N)" afterwards
    """
    base_title = strip_copy_suffix(source_title)
    highest = highest_copy_number(base_title, existing_titles)
    if highest == 0:
        return f"{base_title} (Copy)"
    return f"{base_title} (Copy {highest + 1})"


def duplicate_aggregate(store: ResumeStore, source: ResumeAggregate, owner_id: str) -> str:
    """
    Persist a deep copy of `source` for `owner_id`.

    The caller is responsible for the ownership check. The new resume, its
    one-to-one records and every collection row are written in one
    transaction; collection rows keep their field values and sort_order but
    receive fresh ids.

    Returns:
        Id of the new resume
    """
    base_title = strip_copy_suffix(source.title)
    title = next_copy_title(source.title, store.titles_with_prefix(owner_id, base_title))

    row_counts: Dict[str, int] = {}
    with store.transaction():
        copy = store.insert_resume(owner_id, title)

        if source.contact_info is not None:
            store.upsert_contact_info(
                copy.id,
                {name: getattr(source.contact_info, name) for name in CONTACT_FIELDS},
            )
        if source.summary is not None:
            store.upsert_summary(copy.id, source.summary.content)

        for kind, spec in COLLECTIONS.items():
            items = source.items(kind)
            for item in items:
                store.insert_item(kind, copy.id, item.sort_order, spec.row_values(item))
            row_counts[kind] = len(items)

    log_duplication(source.id, copy.id, title, row_counts)
    return copy.id
