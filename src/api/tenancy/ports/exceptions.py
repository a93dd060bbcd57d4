"""Port-level exceptions for the tenancy bounded context."""


class WarningPersistenceDisabledError(Exception):
    """Raised when stored warnings are queried but persistence is disabled.

    The in-memory tracker keeps aggregate counters only. Listing individual
    warnings requires TENANCY_WARN_PERSIST=true.
    """

    pass
