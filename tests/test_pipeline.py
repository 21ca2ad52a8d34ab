"""Tests for the generic list-view pipeline."""

from typing import Optional

import pytest
from pydantic import BaseModel

from techportal.datasource import FetchResult
from techportal.exceptions import FetchError
from techportal.listview import Column, FieldMatch, FilterField, ListView, SortDirection, field_accessor
from techportal.listview.pipeline import NO_RESULTS


class Ticket(BaseModel):
    id: int
    owner: Optional[str] = None
    state: Optional[str] = None


def tickets(n, **fields):
    return [{"id": i, **fields} for i in range(1, n + 1)]


class Loader:
    """Loader returning queued results, or raising queued errors"""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    async def __call__(self, criteria):
        self.calls.append(criteria)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def make_view(loader, cache=None, page_size=20):
    return ListView(
        name="tickets",
        loader=loader,
        model=Ticket,
        columns=[Column("id"), Column("owner", label="Owner"), Column("state")],
        page_size=page_size,
        cache=cache,
        cache_key="snapshot:tickets",
        filter_fields={"state": FilterField(field_accessor("state"), FieldMatch.CODE)},
        keyword_columns=("owner",),
    )


@pytest.mark.asyncio
async def test_load_paginates_47_rows():
    view = make_view(Loader(FetchResult(rows=tickets(47), count=47)))
    await view.load({"owner": "All"})
    assert view.render().pageCount == 3

    assert view.go_to_page(3)
    page = view.render()
    assert [r["id"] for r in page.rows] == list(range(41, 48))
    assert (page.startRecord, page.endRecord, page.total) == (41, 47, 47)
    assert page.message is None


@pytest.mark.asyncio
async def test_out_of_range_page_is_ignored():
    view = make_view(Loader(FetchResult(rows=tickets(47), count=47)))
    await view.load()
    assert not view.go_to_page(4)
    assert view.render().page == 1


@pytest.mark.asyncio
async def test_invalid_rows_are_dropped_at_load():
    rows = [{"id": 1}, {"id": "not a number"}, {"owner": "no id"}]
    view = make_view(Loader(FetchResult(rows=rows, count=3)))
    await view.load()
    assert [t.id for t in view.loaded] == [1]
    assert view.render().total == 1


@pytest.mark.asyncio
async def test_empty_result_shows_no_results_message():
    view = make_view(Loader(FetchResult(rows=[], count=0)))
    await view.load()
    page = view.render()
    assert page.rows == []
    assert page.pageCount == 0
    assert page.message == NO_RESULTS


@pytest.mark.asyncio
async def test_failed_load_without_snapshot_shows_empty_list(memory_cache):
    view = make_view(Loader(FetchError("Server responded with status 500")), cache=memory_cache)
    await view.load()
    page = view.render()
    assert page.rows == []
    assert page.stale is False
    assert page.message == "Error loading tickets: Server responded with status 500"


@pytest.mark.asyncio
async def test_failed_load_falls_back_to_snapshot(memory_cache):
    loader = Loader(
        FetchResult(rows=tickets(3, owner="ann"), count=3),
        FetchError("timed out"),
    )
    first = make_view(loader, cache=memory_cache)
    await first.load()
    assert memory_cache.get("snapshot:tickets") == [
        {"id": i, "owner": "ann", "state": None} for i in (1, 2, 3)
    ]

    second = make_view(loader, cache=memory_cache)
    await second.load()
    page = second.render()
    assert [r["id"] for r in page.rows] == [1, 2, 3]
    assert page.stale is True
    assert page.message == "Error loading tickets: timed out"


@pytest.mark.asyncio
async def test_successful_empty_load_replaces_snapshot(memory_cache):
    memory_cache.set("snapshot:tickets", tickets(2), 60)
    view = make_view(Loader(FetchResult(rows=[], count=0)), cache=memory_cache)
    await view.load()
    assert memory_cache.get("snapshot:tickets") == []


@pytest.mark.asyncio
async def test_refine_filters_and_resets_to_first_page():
    rows = tickets(30, state="Open") + [{"id": 31, "state": "Closed"}]
    view = make_view(Loader(FetchResult(rows=rows, count=31)))
    await view.load()
    view.go_to_page(2)

    view.refine({"state": "Closed"})
    page = view.render()
    assert page.page == 1
    assert page.total == 1
    assert [r["id"] for r in page.rows] == [31]

    view.refine({"state": "All"})
    assert view.render().total == 31


@pytest.mark.asyncio
async def test_refine_with_no_matches_sets_message():
    view = make_view(Loader(FetchResult(rows=tickets(3, owner="ann"), count=3)))
    await view.load()
    view.refine({}, keyword="bob")
    page = view.render()
    assert page.rows == []
    assert page.message == NO_RESULTS


@pytest.mark.asyncio
async def test_server_count_is_reported_but_paging_uses_loaded_rows():
    view = make_view(Loader(FetchResult(rows=tickets(30), count=120)))
    await view.load()
    view.refine({"state": "%"})
    page = view.render()
    assert (page.total, page.pageCount, page.reportedTotal) == (30, 2, 120)

    assert view.go_to_page(2)
    page = view.render()
    assert [r["id"] for r in page.rows] == list(range(21, 31))
    assert (page.startRecord, page.endRecord) == (21, 30)
    assert not view.go_to_page(3)


@pytest.mark.asyncio
async def test_reported_total_absent_when_server_sent_everything():
    view = make_view(Loader(FetchResult(rows=tickets(5), count=5)))
    await view.load()
    assert view.render().reportedTotal is None


@pytest.mark.asyncio
async def test_keyword_search_covers_fields_outside_the_columns():
    view = ListView(
        name="tickets",
        loader=Loader(FetchResult(rows=[{"id": 1, "state": "Open"}, {"id": 2, "state": "Closed"}], count=2)),
        model=Ticket,
        columns=[Column("id")],
        page_size=20,
        keyword_columns=("state",),
    )
    await view.load()
    view.refine({})
    assert view.render().total == 2
    view.refine({}, keyword="clos")
    assert [r["id"] for r in view.render().rows] == [2]


@pytest.mark.asyncio
async def test_error_message_uses_view_action():
    view = ListView(
        name="jobs",
        loader=Loader(FetchError("timed out")),
        model=Ticket,
        columns=[Column("id")],
        page_size=20,
        action="searching",
    )
    await view.load()
    assert view.render().message == "Error searching jobs: timed out"


@pytest.mark.asyncio
async def test_sort_by_toggles_and_keeps_nulls_last():
    rows = [{"id": 1, "owner": "bob"}, {"id": 2}, {"id": 3, "owner": "Ann"}]
    view = make_view(Loader(FetchResult(rows=rows, count=3)))
    await view.load()

    view.sort_by("owner")
    page = view.render()
    assert [r["id"] for r in page.rows] == [3, 1, 2]
    assert (page.sortColumn, page.sortDirection) == ("owner", "asc")
    assert page.columns[1] == {"name": "owner", "label": "Owner", "sortIcon": "fa-sort-up", "sortClass": "sorted-asc"}

    view.sort_by("owner")
    page = view.render()
    assert [r["id"] for r in page.rows] == [1, 3, 2]
    assert page.sortDirection == "desc"

    view.sort_by("id")
    assert view.sort_state.direction is SortDirection.ASC


@pytest.mark.asyncio
async def test_sort_survives_refine():
    rows = [{"id": 1, "state": "Open"}, {"id": 2, "state": "Open"}, {"id": 3, "state": "Closed"}]
    view = make_view(Loader(FetchResult(rows=rows, count=3)))
    await view.load()
    view.sort("id", SortDirection.DESC)
    view.refine({"state": "Open"})
    assert [r["id"] for r in view.render().rows] == [2, 1]


@pytest.mark.asyncio
async def test_unknown_sort_column_raises():
    view = make_view(Loader(FetchResult(rows=tickets(2), count=2)))
    await view.load()
    with pytest.raises(KeyError):
        view.sort_by("colour")
    view.sort(None)
    assert view.render().sortColumn is None


@pytest.mark.asyncio
async def test_next_and_previous_page():
    view = make_view(Loader(FetchResult(rows=tickets(25), count=25)), page_size=10)
    await view.load()
    assert view.next_page()
    assert view.next_page()
    assert not view.next_page()
    assert view.render().page == 3
    assert view.previous_page()
    assert view.render().pageWindow == [1, 2, 3]


def test_page_size_must_be_in_range():
    with pytest.raises(ValueError):
        make_view(Loader(), page_size=0)
    with pytest.raises(ValueError):
        make_view(Loader(), page_size=501)
    assert make_view(Loader(), page_size=500).page_size == 500
