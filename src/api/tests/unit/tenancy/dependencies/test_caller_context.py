"""Unit tests for caller context resolution.

Identity arrives from the upstream gateway headers; these tests cover how
the effective tenant is chosen for members, super users and anonymous
requests.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi import Depends, FastAPI, HTTPException
from fastapi.testclient import TestClient

from infrastructure.settings import TenancySettings, get_tenancy_settings
from shared_kernel.middleware.observability import CallerContextProbe
from shared_kernel.middleware.tenant_context import CallerContext
from tenancy.dependencies.caller_context import (
    get_caller_context,
    get_caller_context_probe,
    require_effective_tenant_id,
    require_tenant_id_for_create,
    resolve_caller_context,
    tenant_id_for_create,
)
from tenancy.domain.exceptions import TenantContextRequiredError
from tenancy.domain.value_objects import TenancyErrorCode


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=CallerContextProbe)


def resolve(probe, **overrides) -> CallerContext:
    kwargs = {
        "user_id": "user-1",
        "role": "employee",
        "home_tenant_id": "t1",
        "x_tenant_id": None,
        "super_user_role": "super_user",
        "probe": probe,
    }
    kwargs.update(overrides)
    return resolve_caller_context(**kwargs)


class TestResolveCallerContext:
    def test_anonymous_request(self, mock_probe):
        caller = resolve(mock_probe, user_id=None)

        assert caller == CallerContext.anonymous()
        assert caller.is_authenticated is False
        mock_probe.anonymous_caller.assert_called_once()

    def test_blank_user_id_is_anonymous(self, mock_probe):
        assert resolve(mock_probe, user_id="  ").is_authenticated is False

    def test_member_acts_as_home_tenant(self, mock_probe):
        caller = resolve(mock_probe)

        assert caller.effective_tenant_id == "t1"
        assert caller.source == "home"
        assert caller.is_super_user is False
        mock_probe.caller_resolved.assert_called_once_with(
            user_id="user-1", role="employee", effective_tenant_id="t1"
        )

    def test_member_override_header_is_ignored(self, mock_probe):
        caller = resolve(mock_probe, x_tenant_id="t2")

        assert caller.effective_tenant_id == "t1"
        mock_probe.tenant_override_ignored.assert_called_once_with(
            requested_tenant_id="t2", user_id="user-1"
        )

    def test_member_without_home_tenant(self, mock_probe):
        caller = resolve(mock_probe, home_tenant_id="")

        assert caller.effective_tenant_id is None
        assert caller.has_tenant_context is False
        assert caller.source == "none"
        mock_probe.home_tenant_missing.assert_called_once_with(
            user_id="user-1", role="employee"
        )

    def test_super_user_override(self, mock_probe):
        caller = resolve(
            mock_probe, role="super_user", home_tenant_id=None, x_tenant_id="t9"
        )

        assert caller.is_super_user is True
        assert caller.effective_tenant_id == "t9"
        assert caller.source == "override"
        mock_probe.tenant_override_applied.assert_called_once_with(
            tenant_id="t9", user_id="user-1"
        )

    def test_super_user_without_override_has_no_tenant(self, mock_probe):
        caller = resolve(mock_probe, role="super_user", home_tenant_id="t1")

        assert caller.is_super_user is True
        assert caller.effective_tenant_id is None
        assert caller.source == "none"

    def test_super_user_role_is_configurable(self, mock_probe):
        caller = resolve(
            mock_probe, role="platform_admin", super_user_role="platform_admin"
        )

        assert caller.is_super_user is True


class TestRequireTenantIdForCreate:
    def test_returns_effective_tenant(self):
        caller = CallerContext(
            user_id="u", role="admin", home_tenant_id="t1", effective_tenant_id="t1"
        )

        assert require_tenant_id_for_create(caller, "project") == "t1"
        assert require_effective_tenant_id(caller) == "t1"

    def test_super_user_message_points_at_header(self):
        caller = CallerContext(
            user_id="u",
            role="super_user",
            home_tenant_id=None,
            effective_tenant_id=None,
            is_super_user=True,
        )

        with pytest.raises(TenantContextRequiredError) as exc_info:
            require_tenant_id_for_create(caller, "project")

        assert "X-Tenant-Id" in str(exc_info.value)
        assert exc_info.value.entity_type == "project"
        assert exc_info.value.code is TenancyErrorCode.TENANT_CONTEXT_REQUIRED

    def test_member_without_tenant(self):
        caller = CallerContext(
            user_id="u", role="employee", home_tenant_id=None, effective_tenant_id=None
        )

        with pytest.raises(TenantContextRequiredError, match="not associated"):
            require_tenant_id_for_create(caller, "client")

        assert require_effective_tenant_id(caller) is None

    def test_dependency_maps_to_400(self):
        dependency = tenant_id_for_create("project")
        caller = CallerContext.anonymous()

        with pytest.raises(HTTPException) as exc_info:
            dependency(caller=caller)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail["code"] == "TENANT_CONTEXT_REQUIRED"


class TestGetCallerContextDependency:
    """Header extraction through a real FastAPI request."""

    @pytest.fixture
    def client(self, mock_probe) -> TestClient:
        app = FastAPI()

        @app.get("/whoami")
        def whoami(caller: CallerContext = Depends(get_caller_context)) -> dict:
            return {
                "user_id": caller.user_id,
                "effective_tenant_id": caller.effective_tenant_id,
                "source": caller.source,
            }

        app.dependency_overrides[get_tenancy_settings] = lambda: TenancySettings(
            super_user_role="super_user"
        )
        app.dependency_overrides[get_caller_context_probe] = lambda: mock_probe
        return TestClient(app)

    def test_reads_gateway_headers(self, client):
        response = client.get(
            "/whoami",
            headers={
                "X-User-Id": "user-1",
                "X-User-Role": "employee",
                "X-User-Tenant-Id": "t1",
            },
        )

        assert response.json() == {
            "user_id": "user-1",
            "effective_tenant_id": "t1",
            "source": "home",
        }

    def test_super_user_override_header(self, client):
        response = client.get(
            "/whoami",
            headers={
                "X-User-Id": "root",
                "X-User-Role": "super_user",
                "X-Tenant-Id": "t7",
            },
        )

        assert response.json()["effective_tenant_id"] == "t7"
        assert response.json()["source"] == "override"

    def test_no_headers_is_anonymous(self, client):
        response = client.get("/whoami")

        assert response.json()["user_id"] is None
