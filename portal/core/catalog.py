"""Requirement slot catalog shipped with the portal.

The catalog lists the requirement slots the registry starts with, grouped by
collection. Deployments may replace it by pointing
``PORTAL_REQUIREMENTS_FILE`` at a JSON document of the same shape.
"""
from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from portal.core import settings
from portal.core.schema import RequirementCatalog

BACKGROUND_CHECKS = "background_checks"
MEDICAL_DOCUMENTS = "medical_documents"

DEFAULT_CATALOG: dict[str, list[str]] = {
    BACKGROUND_CHECKS: [
        "Criminal Record Check (CRC)",
        "Vulnerable Sector Check (VSC)",
    ],
    MEDICAL_DOCUMENTS: [
        "COVID-19",
        "Health Clearance Card",
        "Hepatitis B Antigen Serology - HBsAg (Test for Infection)",
        "Hepatitis B Primary Series",
        "Hepatitis B Second Series",
        "Hepatitis C",
        "Human Immunodeficiency Virus (HIV)",
        "Influenza",
        "Measles",
        "MMR Booster",
        "Mumps",
        "Polio",
        "Rabies Primary Series",
    ],
}


class CatalogError(ValueError):
    """Raised when a requirement catalog file cannot be used."""


def parse_catalog(data: object) -> dict[str, list[str]]:
    try:
        catalog = RequirementCatalog.model_validate(data)
    except ValidationError as exc:
        raise CatalogError(f"invalid requirement catalog: {exc}") from exc
    return {collection: list(names) for collection, names in catalog.root.items()}


def load_catalog(path: Path | None = None) -> dict[str, list[str]]:
    """Return the configured catalog, falling back to :data:`DEFAULT_CATALOG`."""

    path = path or settings.requirements_file()
    if path is None:
        return {collection: list(names) for collection, names in DEFAULT_CATALOG.items()}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"cannot read requirement catalog {path}: {exc}") from exc
    return parse_catalog(data)
