from __future__ import annotations

import json
from dataclasses import replace

import pytest

from attendance_tracker.core.constants import ORG_SETTINGS_KEY
from attendance_tracker.core.exceptions import (
    DuplicateEntryError,
    NotFoundError,
    ReferentialConstraintError,
    ValidationError,
)


def test_add_department_appends_and_persists(repo, store):
    settings = repo.add_department("Legal")

    assert settings.departments[-1] == "Legal"
    assert json.loads(store.load(ORG_SETTINGS_KEY))["departments"][-1] == "Legal"


def test_add_duplicate_department_is_rejected(repo):
    before = repo.settings
    with pytest.raises(DuplicateEntryError):
        repo.add_department("Engineering")
    assert repo.settings == before


def test_duplicate_check_is_case_sensitive(repo):
    repo.add_department("engineering")
    assert "engineering" in repo.settings.departments
    assert "Engineering" in repo.settings.departments


def test_add_blank_position_is_rejected(repo):
    with pytest.raises(ValidationError):
        repo.add_position("   ")


def test_remove_unused_department(repo):
    settings = repo.remove_department("Marketing")
    assert "Marketing" not in settings.departments


def test_remove_referenced_department_is_rejected(repo, ada):
    before = repo.settings.departments
    with pytest.raises(ReferentialConstraintError):
        repo.remove_department("Engineering")
    assert repo.settings.departments == before


def test_remove_referenced_position_is_rejected(repo, ada):
    before = repo.settings.positions
    with pytest.raises(ReferentialConstraintError):
        repo.remove_position("Senior")
    assert repo.settings.positions == before


def test_position_freed_after_employee_deleted(repo, ada):
    repo.delete_employee(ada.id)
    assert "Senior" not in repo.remove_position("Senior").positions


def test_remove_absent_value_raises_not_found(repo):
    with pytest.raises(NotFoundError):
        repo.remove_position("Astronaut")


def test_update_settings_replaces_name_and_color(repo):
    repo.update_settings(replace(repo.settings, name="Acme", accent_color="#10b981"))

    assert repo.settings.name == "Acme"
    assert repo.settings.accent_color == "#10b981"


def test_update_settings_requires_a_name(repo, store):
    before = repo.settings

    with pytest.raises(ValidationError):
        repo.update_settings(replace(before, name="  "))
    assert repo.settings == before
    assert store.load(ORG_SETTINGS_KEY) is None


def test_update_settings_cannot_drop_referenced_department(repo, ada):
    before = repo.settings
    trimmed = before.with_departments(d for d in before.departments if d != "Engineering")

    with pytest.raises(ReferentialConstraintError):
        repo.update_settings(trimmed)
    assert repo.settings == before
