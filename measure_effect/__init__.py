"""
Measure Effect Backend Package.

FastAPI service layer for the appointment-setting measure effect dashboard.
Aggregates raw call results into daily and campaign-level appointment rates
and compares rates before and after each campaign revision.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, dependencies and exceptions
    - models: Pydantic schemas and enums
    - services: Aggregation and comparison logic
    - sql: Parameterized SQL queries
"""

__version__ = "1.0.0"
