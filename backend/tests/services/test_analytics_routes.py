"""Analytics routes — statistics, bar chart, pie chart, combined view over HTTP.

Invariants:
    - Invalid month names → 400 INVALID_MONTH before any aggregation
    - Responses use camelCase keys
    - /combined merges the three views; failures → 500 naming the sub-aggregation
"""

import pytest

from salescope.core.domain_types import SubAggregation
import salescope.infrastructure.snapshot_registry as snapshot_module
import salescope.services.combined_view as combined_module
from tests.factories import make_transaction, worked_example


@pytest.fixture
def example_store(store):
    store.publish(worked_example())
    return store


async def test_statistics_for_january(client, example_store):
    res = await client.get("/api/v1/statistics/january")
    assert res.status_code == 200
    assert res.json() == {
        "totalSalesAmount": 200.0,
        "totalSoldItems": 1,
        "totalNotSoldItems": 1,
    }


async def test_bar_chart_has_ten_ordered_buckets(client, example_store):
    res = await client.get("/api/v1/barchart/January")
    assert res.status_code == 200
    body = res.json()
    assert [b["range"] for b in body] == [
        "0-100", "101-200", "201-300", "301-400", "401-500",
        "501-600", "601-700", "701-800", "801-900", "901-above",
    ]
    assert [b["count"] for b in body] == [1, 1, 0, 0, 0, 0, 0, 0, 0, 0]


async def test_bar_chart_boundaries_900_and_901(client, store):
    store.publish([
        make_transaction(month=4, price="900"),
        make_transaction(month=4, price="901"),
    ])
    body = (await client.get("/api/v1/barchart/April")).json()
    counts = {b["range"]: b["count"] for b in body}
    assert counts["801-900"] == 1
    assert counts["901-above"] == 1


async def test_pie_chart(client, example_store):
    res = await client.get("/api/v1/piechart/JANUARY")
    assert res.status_code == 200
    assert res.json() == [
        {"category": "A", "itemCount": 1},
        {"category": "B", "itemCount": 1},
    ]


async def test_combined_view(client, example_store):
    res = await client.get("/api/v1/combined/january")
    assert res.status_code == 200
    body = res.json()
    assert set(body) == {"statistics", "barChart", "pieChart"}
    assert body["statistics"]["totalSoldItems"] == 1
    assert len(body["barChart"]) == 10
    assert body["pieChart"] == [
        {"category": "A", "itemCount": 1},
        {"category": "B", "itemCount": 1},
    ]


async def test_combined_view_is_byte_identical_on_repeat(client, example_store):
    first = await client.get("/api/v1/combined/january")
    second = await client.get("/api/v1/combined/january")
    assert first.content == second.content


@pytest.mark.parametrize("path", [
    "/api/v1/statistics/jan",
    "/api/v1/barchart/Smarch",
    "/api/v1/piechart/13",
    "/api/v1/combined/febuary",
    "/api/v1/months/sept/transactions",
])
async def test_invalid_month_is_400(client, example_store, path):
    res = await client.get(path)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_MONTH"
    assert res.json()["error"]["category"] == "validation"


async def test_empty_dataset_returns_zero_values(client, store):
    stats = (await client.get("/api/v1/statistics/may")).json()
    assert stats == {"totalSalesAmount": 0.0, "totalSoldItems": 0, "totalNotSoldItems": 0}
    pie = (await client.get("/api/v1/piechart/may")).json()
    assert pie == []


async def test_uninitialized_store_is_503(client, monkeypatch):
    monkeypatch.setattr(snapshot_module, "snapshot_store", None)
    res = await client.get("/api/v1/statistics/may")
    assert res.status_code == 503
    assert res.json()["error"]["code"] == "DATA_UNAVAILABLE"


async def test_combined_view_failure_is_500_and_names_aggregation(
    client, example_store, monkeypatch,
):
    def broken(_):
        raise RuntimeError("boom")

    monkeypatch.setitem(combined_module.AGGREGATORS, SubAggregation.PIE_CHART, broken)
    res = await client.get("/api/v1/combined/january")
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "AGGREGATION_FAILED"
    assert error["failed"] == ["pie_chart"]
    assert "boom" not in res.text


async def test_month_transactions(client, example_store):
    res = await client.get("/api/v1/months/january/transactions")
    assert res.status_code == 200
    body = res.json()
    assert [t["id"] for t in body] == [1, 2]
    assert "dateOfSale" in body[0]


async def test_list_months(client):
    res = await client.get("/api/v1/months")
    assert res.status_code == 200
    assert res.json()[0] == "January"
    assert len(res.json()) == 12
