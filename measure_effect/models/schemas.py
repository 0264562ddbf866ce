"""
Pydantic request/response models for the Measure Effect backend.

This module provides type-safe validation for the two external datasets the
service reads (call results and campaign revisions) and the response
contracts consumed by the dashboard UI.

Response field names intentionally mix snake_case and camelCase: they mirror
the JSON the dashboard frontend already renders (summary rows use the
database column names, detail payloads use camelCase aggregates).

All models use Pydantic v2 syntax.
"""

from datetime import date as DateType, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from measure_effect.models.enums import ChartType, MeasureCategory


def _to_calendar_day(value: Any) -> Any:
    """
    Truncate a timestamp-like value to its calendar day.

    Accepts date, datetime and ISO-8601 strings ("2025-07-01" or
    "2025-07-01T09:00:00Z"); anything else is left for pydantic to reject.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, DateType):
        return value
    if isinstance(value, str) and len(value) >= 10:
        return DateType.fromisoformat(value[:10])
    return value


# =============================================================================
# Source Datasets (read-only, populated by an external pipeline)
# =============================================================================


class CallResultRecord(BaseModel):
    """
    One row of the call_results table: a client/script/list/day tally.

    operating_date is stored as a timestamp upstream; only its calendar day
    matters here, so it is truncated on load.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "client_name": "Acme",
                "script_name": "ScriptA",
                "list_name": "ListX",
                "operating_date": "2025-07-01",
                "call_count": 100,
                "appointment": 10
            }
        }
    )

    client_name: str = Field(..., description="Client the campaign belongs to")
    script_name: Optional[str] = Field(
        default=None,
        description="Talk script used on the calls"
    )
    list_name: Optional[str] = Field(
        default=None,
        description="Contact list that was dialed"
    )
    operating_date: DateType = Field(..., description="Calendar day of the calls")
    call_count: int = Field(default=0, ge=0, description="Number of calls placed")
    appointment: int = Field(default=0, ge=0, description="Appointments obtained")

    @field_validator('operating_date', mode='before')
    @classmethod
    def truncate_operating_date(cls, value: Any) -> Any:
        return _to_calendar_day(value)

    @field_validator('call_count', 'appointment', mode='before')
    @classmethod
    def null_count_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class CampaignRevision(BaseModel):
    """
    One row of the campaign_revisions table: a dated change to a campaign.

    Which of the three list fields are filled determines the measure
    category (see services.revision_classifier). Empty strings are treated
    the same as NULL.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "client_name": "Acme",
                "execution_date": "2025-07-15",
                "pre_fix_talk_list_name": "ScriptOld",
                "post_fix_talk_list_name": "ScriptNew",
                "deleted_list_name": None
            }
        }
    )

    client_name: str = Field(..., description="Client the revision applies to")
    execution_date: DateType = Field(..., description="Day the revision took effect")
    pre_fix_talk_list_name: Optional[str] = Field(
        default=None,
        description="Talk script in use before the revision"
    )
    post_fix_talk_list_name: Optional[str] = Field(
        default=None,
        description="Talk script in use from the execution date"
    )
    deleted_list_name: Optional[str] = Field(
        default=None,
        description="Contact list whose unusable records were removed"
    )

    @field_validator('execution_date', mode='before')
    @classmethod
    def truncate_execution_date(cls, value: Any) -> Any:
        return _to_calendar_day(value)

    @field_validator(
        'pre_fix_talk_list_name',
        'post_fix_talk_list_name',
        'deleted_list_name',
        mode='before'
    )
    @classmethod
    def blank_as_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


# =============================================================================
# Rate and Comparison Payloads
# =============================================================================


class RateStatsResponse(BaseModel):
    """Totals and appointment rate for one window."""
    totalCalls: int = Field(..., ge=0, description="Sum of call_count")
    totalAppointments: int = Field(..., ge=0, description="Sum of appointment")
    appointmentRate: Optional[str] = Field(
        default=None,
        description="Appointments / calls * 100 with two decimals; null when undetermined"
    )


class ComparisonResponse(BaseModel):
    """Before/after stats split at a revision's execution date."""
    preStats: RateStatsResponse
    postStats: RateStatsResponse
    diff: Optional[str] = Field(
        default=None,
        description="Post rate minus pre rate with two decimals; null if either side is null"
    )


# =============================================================================
# Chart Payloads
# =============================================================================


class ChartPoint(BaseModel):
    """One point of a daily series; x is an ISO date."""
    x: str
    y: str


class ChartDataSet(BaseModel):
    """
    A Chart.js dataset for one dimension value and one metric.

    Rate series render as lines, call-count series as bars.
    """
    label: str
    data: List[ChartPoint] = Field(default_factory=list)
    borderColor: str
    backgroundColor: str
    type: ChartType
    fill: bool


# =============================================================================
# Monthly Summary
# =============================================================================


class MonthlySummaryRow(BaseModel):
    """One revision in the monthly overview table."""
    client_name: str
    execution_date: DateType
    measure_name: MeasureCategory
    talk_improvement_pre_rate: Optional[str] = None
    talk_improvement_post_rate: Optional[str] = None
    talk_improvement_diff: Optional[str] = None
    data_deletion_pre_rate: Optional[str] = None
    data_deletion_post_rate: Optional[str] = None
    data_deletion_diff: Optional[str] = None
    pre_fix_talk_list_name: Optional[str] = None
    post_fix_talk_list_name: Optional[str] = None
    deleted_list_name: Optional[str] = None


# =============================================================================
# Client Detail
# =============================================================================


class ClientRevision(BaseModel):
    """
    A classified revision with its calendar-month comparisons.

    preMeasureStats/postMeasureStats hold the primary comparison (talk
    improvement when present, otherwise data deletion); the two components
    are also available separately for revisions categorized as both.
    """
    execution_date: DateType
    measure_name: MeasureCategory
    preMeasureStats: Optional[RateStatsResponse] = None
    postMeasureStats: Optional[RateStatsResponse] = None
    talkImprovement: Optional[ComparisonResponse] = None
    dataDeletion: Optional[ComparisonResponse] = None
    pre_fix_talk_list_name: Optional[str] = None
    post_fix_talk_list_name: Optional[str] = None
    deleted_list_name: Optional[str] = None


class DimensionAggregate(BaseModel):
    """Month totals for one script or list, with revision stats when referenced."""
    totalCalls: int = Field(..., ge=0)
    totalAppointments: int = Field(..., ge=0)
    appointmentRate: str
    execution_date: Optional[DateType] = None
    preMeasureStats: Optional[RateStatsResponse] = None
    postMeasureStats: Optional[RateStatsResponse] = None


class ClientDetailResponse(BaseModel):
    """Drill-down payload for one client and month."""
    chartDataSets: List[ChartDataSet] = Field(default_factory=list)
    revisions: List[ClientRevision] = Field(default_factory=list)
    totalAppointments: int = 0
    totalCalls: int = 0
    appointmentRate: str = "0.00"
    scriptAggregates: Dict[str, DimensionAggregate] = Field(default_factory=dict)
    listAggregates: Dict[str, DimensionAggregate] = Field(default_factory=dict)


# =============================================================================
# Assistant Stubs
# =============================================================================


class ChatRequest(BaseModel):
    question: str = Field(..., min_length=1)


class ChatResponse(BaseModel):
    answer: str


class ReportRequest(BaseModel):
    summaryData: Any = None
    clientDetailsData: Any = None


class ReportResponse(BaseModel):
    report: str
