"""Index Route: paginated listing with creation-time ordering.

Tests cover:
    - Timestamped models listed newest first
    - Page envelope metadata (page, per, total, page_count)
    - per clamped to max_per_page, invalid page params rejected with 400
    - Empty table yields an empty page
"""


async def test_index_orders_timestamped_models_newest_first(client, seed_widgets):
    res = await client.get("/widgets")
    assert res.status_code == 200
    names = [w["name"] for w in res.json()["items"]]
    assert names == ["Joanna", "Bob", "John"]


async def test_index_returns_page_metadata(client, seed_widgets):
    res = await client.get("/widgets", params={"page": 2, "per": 2})
    body = res.json()
    assert body["metadata"] == {"page": 2, "per": 2, "total": 3, "page_count": 2}
    assert [w["name"] for w in body["items"]] == ["John"]


async def test_index_defaults_to_first_page(client, seed_widgets):
    body = (await client.get("/widgets")).json()
    assert body["metadata"]["page"] == 1
    assert body["metadata"]["per"] == 10


async def test_index_clamps_per_to_configured_maximum(client, seed_widgets):
    body = (await client.get("/widgets", params={"per": 500})).json()
    assert body["metadata"]["per"] == 50


async def test_index_rejects_non_numeric_page(client):
    res = await client.get("/widgets", params={"page": "first"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert res.json()["error"]["details"][0]["field"] == "query.page"


async def test_index_rejects_zero_per(client):
    res = await client.get("/widgets", params={"per": 0})
    assert res.status_code == 400


async def test_index_on_empty_table(client):
    body = (await client.get("/notes")).json()
    assert body["items"] == []
    assert body["metadata"] == {"page": 1, "per": 10, "total": 0, "page_count": 0}


async def test_index_serializes_every_column(client, seed_note):
    item = (await client.get("/notes")).json()["items"][0]
    assert item == {
        "id": str(seed_note.id),
        "title": "Groceries",
        "body": "eggs, milk",
    }
