"""Tenancy bounded context.

Guards tenant data isolation for every read and mutation of a
tenant-scoped resource, with a staged rollout (off, soft, strict) so that
a pre-existing single-tenant dataset can be migrated safely.
"""
