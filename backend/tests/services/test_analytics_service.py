"""AnalyticsService — the logical query interface over the snapshot store."""

import pytest

from salescope.core.errors import InvalidMonthError
from salescope.core.transaction_snapshot import SnapshotStore
from salescope.services.analytics_service import AnalyticsService
from tests.factories import make_transaction, worked_example


@pytest.fixture
def service():
    store = SnapshotStore()
    store.publish(worked_example())
    return AnalyticsService(store)


def test_resolve_month(service):
    assert service.resolve_month("January") == 1
    with pytest.raises(InvalidMonthError):
        service.resolve_month("Jan")


def test_filter_by_month(service):
    assert [t.id for t in service.filter_by_month(1)] == [1, 2]
    assert [t.id for t in service.filter_by_month(2)] == [3]
    assert service.filter_by_month(12) == []


def test_statistics_histogram_categories_for_january(service):
    stats = service.statistics(1)
    assert (stats.total_sales_amount, stats.total_sold_items, stats.total_not_sold_items) == (200, 1, 1)
    assert [b.count for b in service.histogram(1)] == [1, 1, 0, 0, 0, 0, 0, 0, 0, 0]
    assert [(c.category, c.item_count) for c in service.category_breakdown(1)] == [("A", 1), ("B", 1)]


def test_list_transactions_search_one_matches_price_150(service):
    page = service.list_transactions(search="1", page=1, per_page=10)
    ids = [t.id for t in page.items]
    # "1" is not in "Leather bag"/"Brown", only in the price text "150"
    assert 2 in ids
    assert page.total == len(ids)


def test_list_transactions_without_search_lists_everything(service):
    page = service.list_transactions()
    assert page.total == 3
    assert [t.id for t in page.items] == [1, 2, 3]


def test_list_transactions_with_month(service):
    page = service.list_transactions(search="a", month=2)
    assert [t.id for t in page.items] == [3]


def test_list_transactions_out_of_range_page(service):
    page = service.list_transactions(page=5, per_page=10)
    assert page.items == ()
    assert page.total == 3


def test_empty_store_returns_zero_valued_results():
    service = AnalyticsService(SnapshotStore())
    assert service.statistics(3).total_sold_items == 0
    assert sum(b.count for b in service.histogram(3)) == 0
    assert service.category_breakdown(3) == ()
    assert service.list_transactions().total == 0


async def test_combined_view_matches_individual_queries(service):
    view = await service.combined_view(1)
    assert view.statistics == service.statistics(1)
    assert view.bar_chart == service.histogram(1)
    assert view.pie_chart == service.category_breakdown(1)


def test_queries_see_new_snapshot_after_publish(service):
    assert service.statistics(1).total_sold_items == 1
    service.store.publish([make_transaction(month=1, sold=True) for _ in range(4)])
    assert service.statistics(1).total_sold_items == 4


def test_all_transactions_in_store_order(service):
    assert [t.id for t in service.all_transactions()] == [1, 2, 3]
