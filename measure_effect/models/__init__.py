"""
Package initialization file for measure_effect models.

Exports all Pydantic schemas and enumerations so other modules can import
them from measure_effect.models directly.
"""

from measure_effect.models.enums import (
    MeasureCategory,
    DimensionColumn,
    ComparisonKind,
    EmptyRatePolicy,
    ChartType,
)

from measure_effect.models.schemas import (
    # Source datasets
    CallResultRecord,
    CampaignRevision,
    # Rates and comparisons
    RateStatsResponse,
    ComparisonResponse,
    # Charts
    ChartPoint,
    ChartDataSet,
    # Views
    MonthlySummaryRow,
    ClientRevision,
    DimensionAggregate,
    ClientDetailResponse,
    # Assistant stubs
    ChatRequest,
    ChatResponse,
    ReportRequest,
    ReportResponse,
)

__all__ = [
    'MeasureCategory',
    'DimensionColumn',
    'ComparisonKind',
    'EmptyRatePolicy',
    'ChartType',
    'CallResultRecord',
    'CampaignRevision',
    'RateStatsResponse',
    'ComparisonResponse',
    'ChartPoint',
    'ChartDataSet',
    'MonthlySummaryRow',
    'ClientRevision',
    'DimensionAggregate',
    'ClientDetailResponse',
    'ChatRequest',
    'ChatResponse',
    'ReportRequest',
    'ReportResponse',
]
