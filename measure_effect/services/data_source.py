"""
Read access to the call_results and campaign_revisions datasets.

Every service in this package takes a CallResultsSource as its first
argument instead of reaching for a global client, so tests can pass an
in-memory fake and the API layer can inject the PostgreSQL implementation
through FastAPI dependencies.

Read contracts:
- fetch_call_results: exact client, optional exact script/list value,
  operating_date in [start, end)
- fetch_revisions: execution_date in [start, end), optional exact client

Both return freshly validated pydantic records; nothing is cached.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Iterable, List, Optional, Protocol, Type, TypeVar

import asyncpg
from asyncpg import Pool
from pydantic import BaseModel, ValidationError

from measure_effect.core.database import get_db_pool
from measure_effect.core.exceptions import UpstreamFetchError
from measure_effect.models.enums import DimensionColumn
from measure_effect.models.schemas import CallResultRecord, CampaignRevision
from measure_effect.sql.call_result_queries import (
    get_call_results_query,
    get_revisions_query,
)


logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

# InterfaceError (e.g. "connection is closed") is not a PostgresError subclass
DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError, OSError)


def _to_records(model: Type[RecordT], rows: Iterable[Any], table: str) -> List[RecordT]:
    """Validate fetched rows; a malformed row fails the fetch like a driver error."""
    try:
        return [model.model_validate(dict(row)) for row in rows]
    except ValidationError as e:
        logger.error(f"Invalid {table} row: {e}")
        raise UpstreamFetchError(f"Invalid {table} row: {e}") from e


class CallResultsSource(Protocol):
    """Interface the aggregation services read through."""

    async def fetch_call_results(
        self,
        client_name: str,
        start: date,
        end: date,
        dimension: Optional[DimensionColumn] = None,
        value: Optional[str] = None,
    ) -> List[CallResultRecord]:
        ...

    async def fetch_revisions(
        self,
        start: date,
        end: date,
        client_name: Optional[str] = None,
    ) -> List[CampaignRevision]:
        ...


class PostgresCallResultsSource:
    """
    CallResultsSource backed by the Supabase PostgreSQL database.

    Each fetch acquires its own pooled connection, so concurrent fetches
    issued with asyncio.gather run in parallel up to the pool size. The
    shared pool is looked up on first use, so constructing a source never
    touches the database.

    Args:
        pool: Optional asyncpg pool; defaults to the process-wide pool.
    """

    def __init__(self, pool: Optional[Pool] = None):
        self._pool = pool

    async def _get_pool(self) -> Pool:
        if self._pool is None:
            self._pool = await get_db_pool()
        return self._pool

    async def fetch_call_results(
        self,
        client_name: str,
        start: date,
        end: date,
        dimension: Optional[DimensionColumn] = None,
        value: Optional[str] = None,
    ) -> List[CallResultRecord]:
        """
        Fetch call_results rows for a client within [start, end).

        Args:
            client_name: Exact client name.
            start: First day included.
            end: First day excluded.
            dimension: Optional column to filter on (script_name or list_name).
            value: Required when dimension is given; exact value to match.

        Returns:
            List of CallResultRecord ordered by operating_date.

        Raises:
            ValueError: If dimension is given without a value.
            UpstreamFetchError: If the query fails or returns a malformed row.
        """
        args = [client_name, start, end]
        if dimension is not None:
            if value is None:
                raise ValueError("A dimension filter requires a value")
            args.append(value)

        query = get_call_results_query(dimension)
        logger.debug(
            f"Querying call_results for client={client_name}, "
            f"{dimension.value if dimension else 'all'}={value}, range=[{start}, {end})"
        )

        try:
            pool = await self._get_pool()
            async with pool.acquire() as conn:
                rows = await conn.fetch(query, *args)
        except DRIVER_ERRORS as e:
            logger.error(f"Error fetching call_results for client={client_name}: {e}")
            raise UpstreamFetchError(f"Failed to fetch call_results: {e}") from e

        return _to_records(CallResultRecord, rows, "call_results")

    async def fetch_revisions(
        self,
        start: date,
        end: date,
        client_name: Optional[str] = None,
    ) -> List[CampaignRevision]:
        """
        Fetch campaign_revisions executed within [start, end).

        Args:
            start: First day included.
            end: First day excluded.
            client_name: Optional exact client name; all clients when None.

        Returns:
            List of CampaignRevision ordered by execution_date, client_name.

        Raises:
            UpstreamFetchError: If the query fails or returns a malformed row.
        """
        args = [start, end]
        if client_name is not None:
            args.append(client_name)

        query = get_revisions_query(by_client=client_name is not None)

        try:
            pool = await self._get_pool()
            async with pool.acquire() as conn:
                rows = await conn.fetch(query, *args)
        except DRIVER_ERRORS as e:
            logger.error(f"Error fetching campaign_revisions for range=[{start}, {end}): {e}")
            raise UpstreamFetchError(f"Failed to fetch campaign_revisions: {e}") from e

        return _to_records(CampaignRevision, rows, "campaign_revisions")
