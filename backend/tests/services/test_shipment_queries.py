"""Shipment Queries — read surface, NotFound contract and idempotence."""

import pytest

from coldchain.core.domain_types import LogSequence, ShipmentId
from coldchain.core.errors import ShipmentNotFoundError, TemperatureLogNotFoundError
from coldchain.services.shipment_lifecycle import ShipmentLifecycle
from coldchain.services.shipment_queries import ShipmentQueries
from coldchain.services.temperature_logging import TemperatureLogging
from tests.factories import SHIPPER, create_vaccines, ctx

S1 = ShipmentId("S1")
GHOST = ShipmentId("ghost")


@pytest.fixture
def queries(test_db):
    return ShipmentQueries(test_db)


async def test_get_shipment_absent_returns_none(queries):
    assert await queries.get_shipment(GHOST) is None


@pytest.mark.parametrize(
    "query",
    [
        "get_shipment_status",
        "get_quality_assessment",
        "is_temperature_compliant",
        "list_temperature_logs",
        "list_emergency_reports",
    ],
)
async def test_queries_raise_not_found(queries, query):
    with pytest.raises(ShipmentNotFoundError):
        await getattr(queries, query)(GHOST)


async def test_get_temperature_log_unknown_shipment(queries):
    with pytest.raises(ShipmentNotFoundError):
        await queries.get_temperature_log(GHOST, LogSequence(1))


async def test_get_temperature_log_unknown_sequence(test_db, queries):
    await create_vaccines(ShipmentLifecycle(test_db))
    with pytest.raises(TemperatureLogNotFoundError):
        await queries.get_temperature_log(S1, LogSequence(99))


async def test_log_entry_belongs_to_its_shipment(test_db, queries):
    lifecycle = ShipmentLifecycle(test_db)
    await create_vaccines(lifecycle, "S1")
    await create_vaccines(lifecycle, "S2")
    # sequence 2 belongs to S2, not S1
    with pytest.raises(TemperatureLogNotFoundError):
        await queries.get_temperature_log(S1, LogSequence(2))


async def test_list_temperature_logs_ordered_and_paginated(test_db, queries):
    await create_vaccines(ShipmentLifecycle(test_db))
    logging_service = TemperatureLogging(test_db)
    for temp in (4, 5, 6):
        await logging_service.log_temperature(ctx(SHIPPER), S1, temp, "Hub", "SNS-1")

    entries = await queries.list_temperature_logs(S1)
    assert [e.sequence for e in entries] == [1, 2, 3, 4]
    page = await queries.list_temperature_logs(S1, limit=2, offset=1)
    assert [e.temperature for e in page] == [4, 5]


async def test_reads_never_mutate(test_db, queries):
    await create_vaccines(ShipmentLifecycle(test_db))
    before = await queries.get_shipment(S1)
    for _ in range(5):
        await queries.get_shipment(S1)
        await queries.get_shipment_status(S1)
        await queries.get_quality_assessment(S1)
        await queries.is_temperature_compliant(S1)
        await queries.get_temperature_log(S1, LogSequence(1))
    assert await queries.get_shipment(S1) == before
    # counter untouched: next reading still gets sequence 2
    assert await TemperatureLogging(test_db).log_temperature(
        ctx(SHIPPER), S1, 5, "Hub", "SNS-1",
    ) == 2
