"""SQL-runner query catalog.

This module builds the SQL text sent to the PPM SQL runner for each
project variant, the milestone list, each feature variant, and the
linked feature id lookup. Select lists are derived from the variant
vocabularies so queries and reconciliation share one field set.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import SyncValidationError
from core.variants import FeatureLinkage, FeatureVariant, ProjectVariant

ACTIVE_STATUS_CODES = ("NEW", "IN_PROGRESS")
OCTANE_LINKED_CATEGORIES = ("Functional", "Project Initiated (PPM)", "Testing Feature")

_PROJECT_COLUMNS: tuple[tuple[str, str], ...] = (
    ("ISPMO_PRJ_NUM", "kfpp.request_id"),
    ("DESCRIPTION", "kfpp.project_name"),
    ("EPMO_PROJECT_NUM", "krd1.visible_parameter3"),
    ("ISPMO_PM", "replace(kfpp.prj_project_manager_username, '#@#', '; ')"),
    ("ISPMO_PRJ_RAG", "initcap(ppr.overall_health_indicator)"),
    ("ISPM_EPMO_BUSINESS_UNIT", "kfpp.prj_business_unit_meaning"),
    ("ISPMO_EPMO_SUB_AREA", "krhd.visible_parameter1"),
    ("ISPMO_EPMO_BU_PRIORITY", "krhd.visible_parameter2"),
    ("ISPMO_EPMO_ORG_PRIORITY", "krhd.visible_parameter3"),
    ("ISPMO_PRJ_SHORT_DESC", "kr.description"),
    ("ISPMO_INCL_RETAIL_BUILD", "krd1.visible_parameter11"),
    ("ISPMO_INCL_CHARG_SYS", "krd1.visible_parameter12"),
    ("ISPMO_INCL_WHOLSAL_REL", "krd1.visible_parameter13"),
    ("ISPMO_INCL_SIYA_REL", "krd1.visible_parameter14"),
    ("ISPMO_INCL_ILULA_REL", "krd1.visible_parameter15"),
    ("ISPMO_INCL_SIEBEL_REL", "krd1.visible_parameter20"),
    ("ISPMO_EPMO_PM", "krd3.visible_parameter16"),
    ("ISPMO_FUNC_TEST_AUTO", "krhd.visible_parameter25"),
    ("ISPMO_PERF_TEST", "krhd.visible_parameter26"),
    ("ISPMO_SERV_VIRTUAL", "krhd.visible_parameter27"),
)

# Feature fields live in request detail batch 1; the parameter slot differs per type.
_FEATURE_PARAMETER_SLOTS: dict[FeatureVariant, tuple[tuple[str, int], ...]] = {
    FeatureVariant.ISPMO_FEATURE: (
        ("ISPMO_PRJ_RAG", 15),
        ("ISPMO_PM", 5),
        ("ISPMO_PRJ_SHORT_DESC", 34),
        ("ISPMO_EPMO_PM", 4),
        ("ISPMO_EPMO_BU_PRIORITY", 8),
        ("ISPMO_EPMO_ORG_PRIORITY", 9),
        ("ISPM_EPMO_BUSINESS_UNIT", 3),
        ("ISPMO_EPMO_SUB_AREA", 2),
        ("ISPMO_INCL_RETAIL_BUILD", 16),
        ("ISPMO_INCL_CHARG_SYS", 17),
        ("ISPMO_INCL_WHOLSAL_REL", 18),
        ("ISPMO_INCL_SIYA_REL", 19),
        ("ISPMO_INCL_ILULA_REL", 20),
        ("ISPMO_INCL_SIEBEL_REL", 25),
    ),
    FeatureVariant.ISPMO_TESTING_FEATURE: (
        ("ISPMO_PRJ_RAG", 7),
        ("ISPMO_PM", 6),
        ("ISPMO_PRJ_SHORT_DESC", 16),
        ("ISPMO_EPMO_PM", 22),
        ("ISPMO_EPMO_BU_PRIORITY", 12),
        ("ISPMO_EPMO_ORG_PRIORITY", 13),
        ("ISPM_EPMO_BUSINESS_UNIT", 8),
        ("ISPMO_EPMO_SUB_AREA", 11),
        ("ISPMO_INCL_RETAIL_BUILD", 26),
        ("ISPMO_INCL_CHARG_SYS", 27),
        ("ISPMO_INCL_WHOLSAL_REL", 28),
        ("ISPMO_INCL_SIYA_REL", 29),
        ("ISPMO_INCL_ILULA_REL", 30),
        ("ISPMO_INCL_SIEBEL_REL", 31),
        ("ISPMO_FUNC_TEST_AUTO", 37),
        ("ISPMO_PERF_TEST", 38),
        ("ISPMO_SERV_VIRTUAL", 39),
    ),
}
_FEATURE_PARAMETER_SLOTS[FeatureVariant.OCTANE_INITIATED_FEATURE] = _FEATURE_PARAMETER_SLOTS[
    FeatureVariant.ISPMO_FEATURE
]

_FEATURE_REFERENCE_CODES: dict[FeatureVariant, str] = {
    FeatureVariant.ISPMO_FEATURE: "IS_PMO_FEATURE",
    FeatureVariant.ISPMO_TESTING_FEATURE: "IS_PMO_TESTING_FEATURE",
    FeatureVariant.OCTANE_INITIATED_FEATURE: "OCTANE_INITIATED_FEATURE",
}


@dataclass(frozen=True)
class SqlQuery:
    """One named SQL-runner request.

    Attributes:
        name: Short label used in log events.
        sql: SQL text executed by the runner.
    """

    name: str
    sql: str

    def to_payload(self) -> dict[str, str]:
        """Build the SQL-runner JSON request body."""
        return {"querySql": self.sql}


def validate_request_id(request_id: str) -> str:
    """Validate a PPM request id before it is embedded in SQL text.

    Raises:
        SyncValidationError: If the id is not a positive integer string.
    """
    value = request_id.strip()
    if not (value.isascii() and value.isdigit()) or int(value) <= 0:
        raise SyncValidationError(
            f"Invalid PPM request id '{request_id}': expected a positive integer."
        )
    return value


def build_project_query(variant: ProjectVariant, project_id: str) -> SqlQuery:
    """Build the IT project source-field query for a project variant."""
    request_id = validate_request_id(project_id)
    select_list = ", ".join(
        f"{expression} AS {alias.lower()}"
        for alias, expression in _PROJECT_COLUMNS
        if alias in variant.source_fields
    )
    sql = (
        f"SELECT {select_list}"
        " FROM kcrt_fg_pfm_project kfpp"
        " INNER JOIN kcrt_request_types krt ON kfpp.request_type_id = krt.request_type_id"
        " INNER JOIN kcrt_requests kr ON kfpp.request_id = kr.request_id"
        " INNER JOIN kcrt_statuses ks ON kr.status_id = ks.status_id"
        " INNER JOIN kcrt_req_header_details krhd ON kr.request_id = krhd.request_id"
        " INNER JOIN kcrt_request_details krd1"
        " ON kr.request_id = krd1.request_id AND krd1.batch_number = 1"
        " INNER JOIN kcrt_request_details krd3"
        " ON kr.request_id = krd3.request_id AND krd3.batch_number = 3"
        " INNER JOIN pm_projects pp ON kr.request_id = pp.pfm_request_id"
        " INNER JOIN pm_project_rollup ppr ON pp.rollup_id = ppr.rollup_id"
        f" WHERE kfpp.request_id = {request_id}"
    )
    return SqlQuery(name=f"project:{variant.value}", sql=sql)


def build_milestone_query(project_id: str) -> SqlQuery:
    """Build the major-milestone query, ordered by work-plan sequence."""
    request_id = validate_request_id(project_id)
    sql = (
        "SELECT wti.name, wts.sched_finish_date, wta.act_finish_date, ks.state_name"
        " FROM pm_projects pp"
        " INNER JOIN pm_work_plans pwp ON pp.project_id = pwp.project_id"
        " INNER JOIN wp_tasks wt ON pwp.work_plan_id = wt.work_plan_id"
        " INNER JOIN wp_task_info wti"
        " ON wt.task_info_id = wti.task_info_id AND wti.task_type_code = 'M'"
        " INNER JOIN wp_task_schedule wts ON wt.task_schedule_id = wts.task_schedule_id"
        " INNER JOIN wp_task_actuals wta ON wt.task_actuals_id = wta.actuals_id"
        " INNER JOIN wp_milestones wm ON wt.milestone_id = wm.milestone_id AND wm.major = 'Y'"
        " INNER JOIN kdrv_states ks ON wti.status = ks.state_id"
        " WHERE pwp.entity_type = 'WORK_PLAN'"
        f" AND pp.pfm_request_id = {request_id}"
        " ORDER BY wt.sequence_number ASC"
    )
    return SqlQuery(name="milestones", sql=sql)


def build_feature_query(variant: FeatureVariant, project_id: str) -> SqlQuery:
    """Build the feature field query for one feature variant."""
    request_id = validate_request_id(project_id)
    columns = [
        "kr.request_id AS feature_req_id",
        "kr.description AS description",
        *(
            f"krd.visible_parameter{slot} AS {alias.lower()}"
            for alias, slot in _FEATURE_PARAMETER_SLOTS[variant]
        ),
    ]
    sql = (
        f"SELECT {', '.join(columns)}"
        f"{_feature_from_clause(variant)}"
        f" WHERE kr.status_code IN ( {_quoted(ACTIVE_STATUS_CODES)} )"
        f"{_linkage_predicate(variant)}"
        f" AND pp.pfm_request_id = {request_id}"
        " ORDER BY kr.request_id ASC"
    )
    return SqlQuery(name=f"features:{variant.value}", sql=sql)


def build_linked_feature_ids_query(project_id: str) -> SqlQuery:
    """Build the ``UNION ALL`` query of every feature id linked to a project.

    Ids linked through both arms appear twice; callers do not deduplicate.
    """
    request_id = validate_request_id(project_id)
    direct_codes = _quoted(
        tuple(
            _FEATURE_REFERENCE_CODES[variant]
            for variant in FeatureVariant
            if variant.linkage is FeatureLinkage.DIRECT
        )
    )
    sql = (
        "SELECT kfai.request_id"
        " FROM pm_projects pp"
        " INNER JOIN kcrt_fg_master_proj_ref kfpr ON pp.project_id = kfpr.ref_master_project_id"
        " INNER JOIN kcrt_request_types krt"
        f" ON kfpr.request_type_id = krt.request_type_id AND krt.reference_code IN ( {direct_codes} )"
        " INNER JOIN kcrt_fg_agile_info kfai ON kfpr.request_id = kfai.request_id"
        " INNER JOIN kcrt_requests kr ON kfai.request_id = kr.request_id"
        f" WHERE kr.status_code IN ( {_quoted(ACTIVE_STATUS_CODES)} )"
        f" AND pp.pfm_request_id = {request_id}"
        " UNION ALL"
        " SELECT kr.request_id"
        f"{_feature_from_clause(FeatureVariant.OCTANE_INITIATED_FEATURE)}"
        f" WHERE kr.status_code IN ( {_quoted(ACTIVE_STATUS_CODES)} )"
        f"{_linkage_predicate(FeatureVariant.OCTANE_INITIATED_FEATURE)}"
        f" AND pp.pfm_request_id = {request_id}"
        " ORDER BY 1 ASC"
    )
    return SqlQuery(name="linked-feature-ids", sql=sql)


def _feature_from_clause(variant: FeatureVariant) -> str:
    reference_code = _FEATURE_REFERENCE_CODES[variant]
    if variant.linkage is FeatureLinkage.DIRECT:
        return (
            " FROM pm_projects pp"
            " INNER JOIN kcrt_fg_master_proj_ref kfpr"
            " ON pp.project_id = kfpr.ref_master_project_id"
            " INNER JOIN kcrt_request_types krt"
            " ON kfpr.request_type_id = krt.request_type_id"
            f" AND krt.reference_code = '{reference_code}'"
            " INNER JOIN kcrt_requests kr ON kfpr.request_id = kr.request_id"
            " INNER JOIN kcrt_request_details krd"
            " ON kr.request_id = krd.request_id AND krd.batch_number = 1"
            " INNER JOIN kcrt_fg_agile_info kfai ON kfpr.request_id = kfai.request_id"
        )
    # The project id sits in detail parameter 11 of the feature request.
    return (
        " FROM kcrt_fg_agile_info kfai"
        " INNER JOIN kcrt_request_types krt"
        " ON kfai.request_type_id = krt.request_type_id"
        f" AND krt.reference_code = '{reference_code}'"
        " INNER JOIN kcrt_requests kr ON kfai.request_id = kr.request_id"
        " INNER JOIN kcrt_req_header_details krhd ON kr.request_id = krhd.request_id"
        " INNER JOIN kcrt_request_details krd"
        " ON krhd.request_id = krd.request_id AND krd.batch_number = 1"
        " INNER JOIN pm_projects pp ON krd.visible_parameter11 = pp.pfm_request_id"
    )


def _linkage_predicate(variant: FeatureVariant) -> str:
    if variant.linkage is FeatureLinkage.DIRECT:
        return ""
    categories = ", ".join(f"upper('{category}')" for category in OCTANE_LINKED_CATEGORIES)
    return f" AND upper(krhd.visible_parameter4) IN ( {categories} )"


def _quoted(values: tuple[str, ...]) -> str:
    return ", ".join(f"'{value}'" for value in values)
