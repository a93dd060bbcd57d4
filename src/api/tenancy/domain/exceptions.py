"""Domain exceptions for the tenancy bounded context.

Policy rejections are ordinary return values and never appear here. These
exceptions cover programming errors caught by the guard rails and missing
tenant context where a caller cannot proceed at all.
"""

from tenancy.domain.value_objects import TenancyErrorCode


class TenancyGuardError(Exception):
    """Raised by the development guard rails when configured to throw.

    Indicates a tenancy mistake in application code (missing tenant id on an
    insert, client-supplied tenant id, cross-tenant mutation) rather than a
    user-facing policy outcome.
    """

    pass


class TenantContextRequiredError(Exception):
    """Raised when a tenant-scoped entity is created without tenant context.

    The presentation layer maps this to a 400 response carrying ``code``.
    """

    code = TenancyErrorCode.TENANT_CONTEXT_REQUIRED

    def __init__(self, message: str, entity_type: str | None = None):
        super().__init__(message)
        self.entity_type = entity_type


class TenantViolationError(Exception):
    """Raised when a read or write is rejected by the tenancy policy.

    Carries the machine-readable ``code`` returned in the 403 body.
    """

    def __init__(
        self,
        message: str,
        code: TenancyErrorCode = TenancyErrorCode.TENANT_VIOLATION,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
