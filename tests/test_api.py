from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from rpgroster.api import create_app
from rpgroster.config import Settings


YEAR_2500_MS = 16725225600000
YEAR_3000_MS = 32503680000000


@pytest.fixture
async def client(tmp_path: Path):
    app = create_app(Settings(db_path=tmp_path / "api.sqlite"))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


def _payload(name: str = "Abc", **overrides) -> dict:
    data = {
        "name": name,
        "title": "Title",
        "race": "HUMAN",
        "profession": "WARRIOR",
        "birthday": YEAR_2500_MS,
        "experience": 100,
    }
    data.update(overrides)
    return data


async def _create(client: AsyncClient, name: str = "Abc", **overrides) -> dict:
    resp = await client.post("/rest/players", json=_payload(name, **overrides))
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_create_and_get_player(client: AsyncClient):
    created = await _create(client)

    assert created["id"] > 0
    assert created["banned"] is False
    assert created["birthday"] == YEAR_2500_MS

    resp = await client.get(f"/rest/players/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created


@pytest.mark.anyio
async def test_create_rejects_invalid_candidate(client: AsyncClient):
    resp = await client.post("/rest/players", json=_payload("x" * 13))
    assert resp.status_code == 400

    resp = await client.post("/rest/players", json=_payload(birthday=YEAR_3000_MS))
    assert resp.status_code == 400

    resp = await client.post("/rest/players", json=_payload(race="DRAGON"))
    assert resp.status_code == 400

    count = await client.get("/rest/players/count")
    assert count.json() == 0


@pytest.mark.anyio
async def test_get_player_id_checks(client: AsyncClient):
    assert (await client.get("/rest/players/0")).status_code == 400
    assert (await client.get("/rest/players/-4")).status_code == 400
    assert (await client.get("/rest/players/abc")).status_code == 400
    assert (await client.get("/rest/players/77")).status_code == 404


@pytest.mark.anyio
async def test_list_filters_orders_and_pages(client: AsyncClient):
    await _create(client, "Zed", experience=300, race="ORC")
    await _create(client, "Arwen", experience=100, race="ELF")
    await _create(client, "Mid", experience=200, race="ORC", banned=True)
    await _create(client, "Bilbo", experience=100, race="HOBBIT")

    resp = await client.get("/rest/players")
    assert [p["name"] for p in resp.json()] == ["Zed", "Arwen", "Mid"]

    resp = await client.get("/rest/players", params={"order": "NAME", "pageSize": 2, "pageNumber": 1})
    assert [p["name"] for p in resp.json()] == ["Mid", "Zed"]

    resp = await client.get("/rest/players", params={"order": "experience", "pageSize": 10})
    assert [p["name"] for p in resp.json()] == ["Arwen", "Bilbo", "Mid", "Zed"]

    resp = await client.get("/rest/players", params={"race": "ORC", "banned": "false"})
    assert [p["name"] for p in resp.json()] == ["Zed"]

    resp = await client.get("/rest/players", params={"minExperience": 150, "maxExperience": 300})
    assert [p["name"] for p in resp.json()] == ["Zed", "Mid"]

    resp = await client.get("/rest/players/count", params={"maxExperience": 100})
    assert resp.json() == 2


@pytest.mark.anyio
async def test_before_bound_is_inclusive(client: AsyncClient):
    await _create(client)

    resp = await client.get("/rest/players/count", params={"before": YEAR_2500_MS})
    assert resp.json() == 1
    resp = await client.get("/rest/players/count", params={"before": YEAR_2500_MS - 1})
    assert resp.json() == 0
    resp = await client.get("/rest/players/count", params={"after": YEAR_2500_MS})
    assert resp.json() == 1


@pytest.mark.anyio
async def test_list_rejects_bad_parameters(client: AsyncClient):
    assert (await client.get("/rest/players", params={"pageNumber": -1})).status_code == 400
    assert (await client.get("/rest/players", params={"pageSize": -1})).status_code == 400
    assert (await client.get("/rest/players", params={"order": "HEIGHT"})).status_code == 400
    assert (await client.get("/rest/players/count", params={"race": "DRAGON"})).status_code == 400


@pytest.mark.anyio
async def test_update_partial_merge(client: AsyncClient):
    created = await _create(client, level=5)

    resp = await client.post(f"/rest/players/{created['id']}", json={"title": "Hero", "banned": True})
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Hero"
    assert body["banned"] is True
    assert body["name"] == created["name"]
    assert body["level"] == 5


@pytest.mark.anyio
async def test_update_is_all_or_nothing(client: AsyncClient):
    created = await _create(client)

    resp = await client.post(
        f"/rest/players/{created['id']}",
        json={"name": "Fine", "experience": 10_000_001},
    )
    assert resp.status_code == 400

    stored = await client.get(f"/rest/players/{created['id']}")
    assert stored.json() == created


@pytest.mark.anyio
async def test_update_missing_or_invalid_id(client: AsyncClient):
    await _create(client)

    assert (await client.post("/rest/players/999", json={"name": "New"})).status_code == 404
    assert (await client.post("/rest/players/0", json={"name": "New"})).status_code == 400
    assert (await client.get("/rest/players/count")).json() == 1


@pytest.mark.anyio
async def test_delete_player(client: AsyncClient):
    keep = await _create(client, "Keep")
    drop = await _create(client, "Drop")

    resp = await client.delete(f"/rest/players/{drop['id']}")
    assert resp.status_code == 200

    remaining = await client.get("/rest/players")
    assert remaining.json() == [keep]

    assert (await client.delete(f"/rest/players/{drop['id']}")).status_code == 404
    assert (await client.delete("/rest/players/0")).status_code == 400


@pytest.mark.anyio
async def test_update_unknown_id_wins_over_out_of_range_birthday(client: AsyncClient):
    created = await _create(client)

    resp = await client.post("/rest/players/999", json={"birthday": 99999999999999999999})
    assert resp.status_code == 404

    resp = await client.post(f"/rest/players/{created['id']}", json={"birthday": 99999999999999999999})
    assert resp.status_code == 400
