"""Shared enumerations used across the store."""

from __future__ import annotations

from enum import StrEnum


class RecordType(StrEnum):
    """Discriminant ``type`` field of an on-disk record.

    The value doubles as the middle segment of the data file name
    (``insomnia.<type>.db``).
    """

    WORKSPACE = "Workspace"
    REQUEST_GROUP = "RequestGroup"
    REQUEST = "Request"
    ENVIRONMENT = "Environment"
    PROJECT = "Project"


class IdPrefix(StrEnum):
    WORKSPACE = "wrk"
    REQUEST_GROUP = "fld"
    REQUEST = "req"
    ENVIRONMENT = "env"


class WorkspaceScope(StrEnum):
    """Workspace ``scope`` tag.  Only ``collection`` workspaces are managed."""

    COLLECTION = "collection"
    DESIGN = "design"


# -- Insomnia export ---------------------------------------------------------


class ExportResourceType(StrEnum):
    WORKSPACE = "workspace"
    REQUEST_GROUP = "request_group"
    REQUEST = "request"
    ENVIRONMENT = "environment"
