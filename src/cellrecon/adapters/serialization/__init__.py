"""JSON serialization of reconciliation records, libraries and projects."""

from __future__ import annotations

from .codec import (
    ProjectParseError,
    ReconParseError,
    dumps_project,
    dumps_recon,
    library_from_dict,
    library_to_dict,
    loads_project,
    loads_recon,
    project_from_dict,
    project_to_dict,
    recon_from_dict,
    recon_to_dict,
)

__all__ = [
    "ProjectParseError",
    "ReconParseError",
    "dumps_project",
    "dumps_recon",
    "library_from_dict",
    "library_to_dict",
    "loads_project",
    "loads_recon",
    "project_from_dict",
    "project_to_dict",
    "recon_from_dict",
    "recon_to_dict",
]
