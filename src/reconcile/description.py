"""Feature description derivation.

Feature descriptions are prefixed with the IT project number and, for
EPMO projects, suffixed with the EPMO project number.
"""

from __future__ import annotations

from core.constants import DESCRIPTION_TOKEN, EPMO_PROJECT_NUMBER_TOKEN, PROJECT_NUMBER_TOKEN
from core.types import FieldRecord
from core.variants import ProjectVariant


def describe_with_epmo(project_number: str, project_name: str, epmo_number: str) -> str:
    """Build ``(IS <number>) <name> (EPMO <epmo>)``."""
    return f"(IS {project_number}) {project_name} (EPMO {epmo_number})"


def describe_plain(project_number: str, project_name: str) -> str:
    """Build ``(IS <number>) <name>``."""
    return f"(IS {project_number}) {project_name}"


def derive_description(source: FieldRecord, variant: ProjectVariant) -> str:
    """Derive the feature description from a project record.

    Missing source values render as empty segments.
    """
    project_number = _field_text(source, PROJECT_NUMBER_TOKEN)
    project_name = _field_text(source, DESCRIPTION_TOKEN)
    if variant.uses_epmo_description:
        return describe_with_epmo(
            project_number, project_name, _field_text(source, EPMO_PROJECT_NUMBER_TOKEN)
        )
    return describe_plain(project_number, project_name)


def _field_text(record: FieldRecord, token: str) -> str:
    return record.get(token) or ""
