"""Unit tests for the development guard rails."""

from unittest.mock import MagicMock

import pytest

from tenancy.domain.exceptions import TenancyGuardError
from tenancy.domain.guards import TenancyGuard
from tenancy.domain.value_objects import GuardMode


@pytest.fixture
def reporter() -> MagicMock:
    return MagicMock()


class TestAssertTenantIdOnInsert:
    def test_warn_mode_reports_missing_tenant_id(self, reporter):
        guard = TenancyGuard(mode=GuardMode.WARN, reporter=reporter)

        guard.assert_tenant_id_on_insert({"name": "x"}, "projects", request_id="r1")

        reporter.assert_called_once_with(
            "Missing tenant_id in insert to projects",
            {"table": "projects", "request_id": "r1"},
        )

    def test_present_tenant_id_is_not_reported(self, reporter):
        guard = TenancyGuard(mode=GuardMode.WARN, reporter=reporter)

        guard.assert_tenant_id_on_insert({"tenant_id": "t1"}, "projects")

        reporter.assert_not_called()

    def test_throw_mode_raises(self, reporter):
        guard = TenancyGuard(mode=GuardMode.THROW, reporter=reporter)

        with pytest.raises(TenancyGuardError, match=r"^\[TenancyGuard\] Missing"):
            guard.assert_tenant_id_on_insert({"tenant_id": None}, "projects")

        reporter.assert_not_called()

    def test_off_mode_is_silent(self, reporter):
        guard = TenancyGuard(mode=GuardMode.OFF, reporter=reporter)

        guard.assert_tenant_id_on_insert({}, "projects")

        reporter.assert_not_called()

    def test_default_guard_warns_without_reporter(self):
        guard = TenancyGuard()

        assert guard.mode is GuardMode.WARN
        guard.assert_tenant_id_on_insert({}, "projects")


class TestAssertNoClientTenantId:
    def test_reports_tenant_id_in_body(self, reporter):
        guard = TenancyGuard(reporter=reporter)

        guard.assert_no_client_tenant_id({"tenant_id": "t9"}, None, "POST /projects")

        message, details = reporter.call_args.args
        assert "Client-supplied tenant_id detected in POST /projects" in message
        assert details["source"] == "body"

    def test_reports_tenant_id_in_query(self, reporter):
        guard = TenancyGuard(reporter=reporter)

        guard.assert_no_client_tenant_id({}, {"tenant_id": "t9"}, "GET /projects")

        _, details = reporter.call_args.args
        assert details["source"] == "query"

    def test_clean_request_is_not_reported(self, reporter):
        guard = TenancyGuard(reporter=reporter)

        guard.assert_no_client_tenant_id({"name": "x"}, {"page": "1"}, "GET /projects")

        reporter.assert_not_called()


class TestAssertTenantOwnership:
    def test_matching_tenant_passes(self, reporter):
        guard = TenancyGuard(reporter=reporter)

        guard.assert_tenant_ownership("t1", "t1", "project", "p1")

        reporter.assert_not_called()

    @pytest.mark.parametrize("mode", [GuardMode.WARN, GuardMode.OFF])
    def test_mismatch_raises_even_when_not_throwing(self, reporter, mode):
        guard = TenancyGuard(mode=mode, reporter=reporter)

        with pytest.raises(TenancyGuardError, match="Cross-tenant access denied"):
            guard.assert_tenant_ownership("t2", "t1", "project", "p1")

    def test_mismatch_is_reported_before_raising(self, reporter):
        guard = TenancyGuard(mode=GuardMode.WARN, reporter=reporter)

        with pytest.raises(TenancyGuardError):
            guard.assert_tenant_ownership("t2", "t1", "project", "p1")

        message, details = reporter.call_args.args
        assert "project p1 belongs to tenant t2, not t1" in message
        assert details["expected_tenant_id"] == "t1"
