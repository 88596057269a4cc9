"""Project and feature request-type variants.

Each PPM request type exposes a different field vocabulary. The
variants are closed enumerations so an unknown request type name is
rejected before any query runs.
"""

from __future__ import annotations

from enum import Enum

from core.errors import SyncValidationError

_PROJECT_CORE_FIELDS = (
    "ISPMO_PRJ_NUM",
    "DESCRIPTION",
    "ISPMO_PM",
    "ISPMO_PRJ_RAG",
    "ISPM_EPMO_BUSINESS_UNIT",
    "ISPMO_EPMO_SUB_AREA",
    "ISPMO_PRJ_SHORT_DESC",
)
_INCLUSION_FIELDS = (
    "ISPMO_INCL_RETAIL_BUILD",
    "ISPMO_INCL_CHARG_SYS",
    "ISPMO_INCL_WHOLSAL_REL",
    "ISPMO_INCL_SIYA_REL",
    "ISPMO_INCL_ILULA_REL",
    "ISPMO_INCL_SIEBEL_REL",
)
_TESTING_FIELDS = (
    "ISPMO_FUNC_TEST_AUTO",
    "ISPMO_PERF_TEST",
    "ISPMO_SERV_VIRTUAL",
)
_EPMO_FIELDS = (
    "EPMO_PROJECT_NUM",
    "ISPMO_EPMO_BU_PRIORITY",
    "ISPMO_EPMO_ORG_PRIORITY",
    "ISPMO_EPMO_PM",
)
_FEATURE_FIELDS = (
    "DESCRIPTION",
    "ISPMO_PRJ_RAG",
    "ISPMO_PM",
    "ISPMO_PRJ_SHORT_DESC",
    "ISPMO_EPMO_PM",
    "ISPMO_EPMO_BU_PRIORITY",
    "ISPMO_EPMO_ORG_PRIORITY",
    "ISPM_EPMO_BUSINESS_UNIT",
    "ISPMO_EPMO_SUB_AREA",
    *_INCLUSION_FIELDS,
)


class ProjectVariant(Enum):
    """IT project request types and their source field vocabularies."""

    EPMO = "IS PMO IT-EPMO Project"
    KTLO = "IS PMO IT-KTLO Project"
    INFRASTRUCTURE = "IS PMO IT-Infrastructure Project"
    REPORTING_ANALYTICS = "IS PMO IT-Reporting and Analytics Project"

    @classmethod
    def from_name(cls, name: str) -> "ProjectVariant":
        """Resolve a request type name.

        Raises:
            SyncValidationError: If the name is not a known project type.
        """
        for variant in cls:
            if variant.value == name.strip():
                return variant
        supported_rows = ", ".join(variant.value for variant in cls)
        raise SyncValidationError(
            f"Invalid IT project request type name '{name}'. Use one of: {supported_rows}."
        )

    @property
    def source_fields(self) -> frozenset[str]:
        """Field tokens the project query returns for this variant."""
        return _PROJECT_SOURCE_FIELDS[self]

    @property
    def uses_epmo_description(self) -> bool:
        """Whether feature descriptions carry the EPMO project number."""
        return self is ProjectVariant.EPMO


_PROJECT_SOURCE_FIELDS: dict[ProjectVariant, frozenset[str]] = {
    ProjectVariant.EPMO: frozenset(
        (*_PROJECT_CORE_FIELDS, *_EPMO_FIELDS, *_INCLUSION_FIELDS, *_TESTING_FIELDS)
    ),
    ProjectVariant.KTLO: frozenset((*_PROJECT_CORE_FIELDS, *_INCLUSION_FIELDS, *_TESTING_FIELDS)),
    ProjectVariant.INFRASTRUCTURE: frozenset(
        (*_PROJECT_CORE_FIELDS, "EPMO_PROJECT_NUM", *_TESTING_FIELDS)
    ),
    ProjectVariant.REPORTING_ANALYTICS: frozenset((*_PROJECT_CORE_FIELDS, *_TESTING_FIELDS)),
}


class FeatureLinkage(Enum):
    """How a feature request points at its parent project."""

    DIRECT = "direct"
    CROSS_REFERENCE = "cross_reference"


class FeatureVariant(Enum):
    """Feature request types synchronized from an IT project."""

    ISPMO_FEATURE = "IS PMO Feature"
    ISPMO_TESTING_FEATURE = "IS PMO Testing Feature"
    OCTANE_INITIATED_FEATURE = "Octane Initiated Feature"

    @property
    def target_fields(self) -> frozenset[str]:
        """Field tokens the feature query returns, excluding the id column."""
        if self is FeatureVariant.ISPMO_TESTING_FEATURE:
            return frozenset((*_FEATURE_FIELDS, *_TESTING_FIELDS))
        return frozenset(_FEATURE_FIELDS)

    @property
    def linkage(self) -> FeatureLinkage:
        """Linkage predicate used to find features of this type."""
        if self is FeatureVariant.OCTANE_INITIATED_FEATURE:
            return FeatureLinkage.CROSS_REFERENCE
        return FeatureLinkage.DIRECT

    @property
    def receives_milestones(self) -> bool:
        """Whether the feature carries the project milestone table field."""
        return self.linkage is FeatureLinkage.DIRECT
