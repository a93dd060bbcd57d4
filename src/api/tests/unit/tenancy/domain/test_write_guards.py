"""Unit tests for the insert, update and delete write guards."""

import pytest

from tenancy.domain.value_objects import EnforcementMode, WriteValidationResult
from tenancy.domain.write_guards import (
    ensure_insert_tenant_id,
    validate_delete,
    validate_insert,
    validate_update,
)

ACTIVE_MODES = [EnforcementMode.SOFT, EnforcementMode.STRICT]
ALL_MODES = [EnforcementMode.OFF, *ACTIVE_MODES]

TENANT_INPUTS = [
    ("t1", "t1"),
    ("t1", "t2"),
    (None, "t1"),
    ("t1", None),
    (None, None),
    ("", "t1"),
]


def _assert_allowed(result: WriteValidationResult, warning: str | None = None):
    assert result.valid is True
    assert result.blocked is False
    assert result.error is None
    assert result.warning == warning


def _assert_blocked(result: WriteValidationResult, error: str):
    assert result.valid is False
    assert result.blocked is True
    assert result.error == error


class TestValidateInsert:
    """Tests for validate_insert."""

    @pytest.mark.parametrize(("insert_tenant_id", "effective_tenant_id"), TENANT_INPUTS)
    def test_off_mode_allows_everything(self, insert_tenant_id, effective_tenant_id):
        result = validate_insert(
            insert_tenant_id, effective_tenant_id, "project", mode=EnforcementMode.OFF
        )

        _assert_allowed(result)

    def test_strict_without_tenant_context_is_blocked(self):
        result = validate_insert(None, None, "project", mode=EnforcementMode.STRICT)

        assert result == WriteValidationResult(
            valid=False,
            blocked=True,
            error="Cannot create project: no tenant context",
        )

    def test_soft_without_tenant_context_warns(self):
        result = validate_insert("t1", None, "project", mode=EnforcementMode.SOFT)

        _assert_allowed(result, "Creating project without tenant context")

    def test_strict_without_insert_tenant_is_blocked(self):
        result = validate_insert(None, "t1", "project", mode=EnforcementMode.STRICT)

        _assert_blocked(result, "Cannot create project: tenantId required in strict mode")

    def test_soft_without_insert_tenant_warns(self):
        result = validate_insert(None, "t1", "project", mode=EnforcementMode.SOFT)

        _assert_allowed(result, "Creating project without tenantId")

    @pytest.mark.parametrize("mode", ACTIVE_MODES)
    def test_insert_for_foreign_tenant_is_blocked(self, mode):
        result = validate_insert("A", "B", "project", mode=mode)

        _assert_blocked(result, "Cannot create project for different tenant")

    @pytest.mark.parametrize("mode", ACTIVE_MODES)
    def test_insert_for_own_tenant_is_allowed(self, mode):
        result = validate_insert("t1", "t1", "project", mode=mode)

        _assert_allowed(result)


class TestValidateUpdate:
    """Tests for validate_update."""

    @pytest.mark.parametrize(("existing_tenant_id", "effective_tenant_id"), TENANT_INPUTS)
    def test_off_mode_allows_everything(self, existing_tenant_id, effective_tenant_id):
        result = validate_update(
            existing_tenant_id,
            effective_tenant_id,
            "task",
            "42",
            mode=EnforcementMode.OFF,
        )

        _assert_allowed(result)

    def test_strict_without_tenant_context_is_blocked(self):
        result = validate_update("t1", None, "task", "42", mode=EnforcementMode.STRICT)

        _assert_blocked(result, "Cannot update task:42: no tenant context")

    def test_soft_without_tenant_context_warns(self):
        result = validate_update("t1", None, "task", "42", mode=EnforcementMode.SOFT)

        _assert_allowed(result, "Updating task:42 without tenant context")

    def test_strict_legacy_row_is_blocked(self):
        result = validate_update(None, "t1", "task", "42", mode=EnforcementMode.STRICT)

        _assert_blocked(result, "Cannot update task:42: resource has no tenantId")

    def test_soft_legacy_row_warns(self):
        result = validate_update(None, "t1", "task", "42", mode=EnforcementMode.SOFT)

        _assert_allowed(result, "Updating legacy task:42 without tenantId")

    def test_soft_empty_stored_tenant_is_treated_as_legacy(self):
        result = validate_update("", "t1", "task", "42", mode=EnforcementMode.SOFT)

        _assert_allowed(result, "Updating legacy task:42 without tenantId")

    @pytest.mark.parametrize("mode", ACTIVE_MODES)
    @pytest.mark.parametrize(
        ("existing_tenant_id", "effective_tenant_id"),
        [("t1", "t2"), ("t2", "t1"), ("acme", "globex")],
    )
    def test_mismatch_is_blocked_in_soft_and_strict(
        self, mode, existing_tenant_id, effective_tenant_id
    ):
        result = validate_update(
            existing_tenant_id, effective_tenant_id, "task", "42", mode=mode
        )

        _assert_blocked(result, "Cannot update task:42: belongs to different tenant")


class TestValidateDelete:
    """Deletes carry exactly the update semantics."""

    @pytest.mark.parametrize("mode", ALL_MODES)
    @pytest.mark.parametrize(("existing_tenant_id", "effective_tenant_id"), TENANT_INPUTS)
    def test_delete_mirrors_update(self, mode, existing_tenant_id, effective_tenant_id):
        delete_result = validate_delete(
            existing_tenant_id, effective_tenant_id, "task", "42", mode=mode
        )
        update_result = validate_update(
            existing_tenant_id, effective_tenant_id, "task", "42", mode=mode
        )

        assert delete_result == update_result


class TestEnsureInsertTenantId:
    """Tests for ensure_insert_tenant_id."""

    def test_explicit_value_wins(self):
        assert ensure_insert_tenant_id("t1", "t2") == "t1"

    def test_inherits_effective_tenant(self):
        assert ensure_insert_tenant_id(None, "t2") == "t2"
        assert ensure_insert_tenant_id("", "t2") == "t2"

    def test_none_without_either(self):
        assert ensure_insert_tenant_id(None, None) is None
