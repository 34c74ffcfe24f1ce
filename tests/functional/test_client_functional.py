"""Functional tests for the synchronous API client.

The client is driven against the in-process app by handing it the
TestClient (an ``httpx.Client``) as its transport.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from itemlist.client import ItemListClient, ItemSyncError
from itemlist.config import AppConfig, SeedConfig
from itemlist.logic.errors import ItemNotFoundError
from itemlist.main import create_app


@pytest.fixture
def big_client(make_store):
    store = make_store(45)
    with TestClient(create_app(AppConfig(seed=SeedConfig(count=45)), store)) as tc:
        yield ItemListClient(tc, page_size=20), store


def test_load_more_pages_until_exhausted(big_client) -> None:
    api, _ = big_client
    assert [i.id for i in api.load_more()] == list(range(1, 21))
    assert api.has_more
    api.load_more()
    assert api.has_more
    third = api.load_more()
    assert [i.id for i in third] == list(range(41, 46))
    assert api.has_more is False
    assert api.load_more() == []
    assert len(api.items) == 45


def test_set_search_resets_listing(big_client) -> None:
    api, _ = big_client
    api.load_more()
    api.set_search("title 4")
    assert api.items == [] and api.page == 1 and api.has_more
    api.load_more()
    assert [i.id for i in api.items] == [4] + list(range(40, 46))
    assert api.has_more is False


def test_toggle_pushes_loaded_items_unscoped(big_client) -> None:
    api, store = big_client
    api.load_more()
    item = api.toggle(7)
    assert item.selected is True
    assert store.find(7).selected is True
    assert store.ids() == list(range(1, 46))


def test_toggle_inside_search_is_scoped(big_client) -> None:
    api, store = big_client
    api.set_search("title 4")
    api.load_more()
    api.toggle(42)
    assert store.find(42).selected is True
    # The filtered batch must not be pulled to the front of the full list
    assert store.ids() == list(range(1, 46))


def test_move_sends_nearest_right_neighbour(big_client) -> None:
    api, store = big_client
    api.load_more()
    assert api.move(5, 2) == 2
    assert [i.id for i in api.items[:6]] == [1, 5, 2, 3, 4, 6]
    assert store.ids()[:6] == [1, 5, 2, 3, 4, 6]


def test_move_down_in_filtered_view(big_client) -> None:
    api, store = big_client
    api.set_search("title 1")
    api.load_more()
    # Filtered view: 1, 10..19. Drag 10 onto 12: view becomes 1, 11, 12, 10, 13 ...
    assert api.move(10, 12) == 13
    assert [i.id for i in api.items[:5]] == [1, 11, 12, 10, 13]
    assert store.ids()[9:13] == [11, 12, 10, 13]


def test_move_to_end_of_loaded_list(big_client) -> None:
    api, store = big_client
    api.load_more()
    assert api.move(1, 20) is None
    assert store.ids()[-1] == 1


def test_move_onto_itself_is_noop(big_client) -> None:
    api, store = big_client
    api.load_more()
    assert api.move(3, 3) is None
    assert store.version == 0


def test_toggle_remote(big_client) -> None:
    api, store = big_client
    api.load_more()
    item = api.toggle_remote(9)
    assert item.selected is True
    assert api.items[8].selected is True
    with pytest.raises(ItemNotFoundError):
        api.toggle_remote(999)


def test_unknown_local_item_raises(big_client) -> None:
    api, _ = big_client
    with pytest.raises(ItemNotFoundError):
        api.toggle(1)


def _failing_transport(request: httpx.Request) -> httpx.Response:
    if request.method == "GET":
        return httpx.Response(
            200,
            json={
                "page": 1,
                "limit": 20,
                "totalItems": 2,
                "totalPages": 1,
                "data": [
                    {"id": 1, "title": "Title 1", "isSelected": False},
                    {"id": 2, "title": "Title 2", "isSelected": False},
                ],
            },
        )
    return httpx.Response(500, json={"title": "Internal Server Error", "status": 500, "detail": "boom"})


def test_failed_push_rolls_back_local_changes() -> None:
    http = httpx.Client(transport=httpx.MockTransport(_failing_transport), base_url="http://test")
    api = ItemListClient(http)
    api.load_more()
    with pytest.raises(ItemSyncError) as excinfo:
        api.toggle(1)
    assert excinfo.value.status_code == 500
    assert api.items[0].selected is False
    with pytest.raises(ItemSyncError):
        api.move(2, 1)
    assert [i.id for i in api.items] == [1, 2]
    http.close()
