"""Tests for the source and collection endpoints."""

from app.models import CollectionBatch, NewsSource


async def test_active_sources_only(client, session) -> None:
    session.add_all(
        [
            NewsSource(name="Reuters", url="https://www.reuters.com"),
            NewsSource(name="Bloomberg", url="https://www.bloomberg.com"),
            NewsSource(name="Defunct", url="https://example.org", active=False),
        ]
    )
    await session.commit()

    response = await client.get("/api/v1/sources")

    body = response.json()
    assert body["total"] == 2
    assert [s["name"] for s in body["sources"]] == ["Bloomberg", "Reuters"]


async def test_collected_urls_include_source(client, collected_url) -> None:
    response = await client.get("/api/v1/collections/urls")

    urls = response.json()["urls"]
    assert urls[0]["url"] == collected_url.url
    assert urls[0]["source"]["name"] == "Reuters"


async def test_completed_batches(client, session) -> None:
    session.add_all(
        [
            CollectionBatch(batch_id="done", sources_count=3, completed=True),
            CollectionBatch(batch_id="running", sources_count=3),
        ]
    )
    await session.commit()

    response = await client.get("/api/v1/collections/batches")

    assert [b["batch_id"] for b in response.json()["batches"]] == ["done"]
