"""Unit tests for tenancy value objects."""

from datetime import UTC

import pytest
from ulid import ULID

from tenancy.domain.value_objects import (
    TenancyWarning,
    TenancyWarningRecord,
    WarnType,
    WriteValidationResult,
)


class TestWriteValidationResult:
    def test_allowed_without_warning(self):
        result = WriteValidationResult.allowed()

        assert result.valid is True
        assert result.blocked is False
        assert result.warning is None

    def test_rejected_carries_error(self):
        result = WriteValidationResult.rejected("nope")

        assert result.valid is False
        assert result.blocked is True
        assert result.error == "nope"

    def test_is_immutable(self):
        result = WriteValidationResult.allowed()

        with pytest.raises(AttributeError):
            result.blocked = True  # type: ignore[misc]


class TestWarnType:
    def test_wire_values(self):
        assert WarnType.MISMATCH.value == "mismatch"
        assert WarnType.MISSING_TENANT_ID.value == "missing-tenantId"


class TestTenancyWarningRecord:
    def test_defaults_to_ulid_and_utc_timestamp(self):
        record = TenancyWarningRecord(
            warning=TenancyWarning(
                route="/tasks/1", method="GET", warn_type=WarnType.MISMATCH
            )
        )

        ULID.from_str(record.id)
        assert record.occurred_at.tzinfo is UTC
        assert record.warn_type is WarnType.MISMATCH
