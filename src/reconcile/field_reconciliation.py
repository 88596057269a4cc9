"""Field reconciliation between a project and one feature.

This module decides which feature fields take the project value.
Blank feature fields are always filled; populated feature fields are
only corrected when they differ case-insensitively from the project.
"""

from __future__ import annotations

from core.constants import DESCRIPTION_TOKEN
from core.field_values import is_blank, values_differ
from core.types import FieldChange, FieldRecord
from core.variants import ProjectVariant
from reconcile.description import derive_description


def reconcile_fields(
    source: FieldRecord,
    target: FieldRecord,
    variant: ProjectVariant,
) -> tuple[FieldChange, ...]:
    """Compute the reconciled field changes for one feature.

    Args:
        source: Project field record.
        target: Feature field record; only its keys are considered.
        variant: Project variant selecting the description format.

    Returns:
        Field changes in target-key iteration order. Neither record is
        modified.
    """
    changes: list[FieldChange] = []
    for token in target:
        if token not in source:
            continue
        target_value = target[token]
        if token == DESCRIPTION_TOKEN:
            description = derive_description(source, variant)
            if values_differ(target_value, description):
                changes.append(FieldChange(token=token, value=description))
            continue
        source_value = source[token]
        if is_blank(target_value) or values_differ(target_value, source_value):
            changes.append(FieldChange(token=token, value=source_value))
    return tuple(changes)
