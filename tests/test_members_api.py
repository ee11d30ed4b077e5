"""Member search API tests — list, paged, fetch-joined search and registration."""

from httpx import AsyncClient

URL = "/api/v1/members"


class TestSearch:

    async def test_search_without_criteria_returns_everyone(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search")
        assert res.status_code == 200
        data = res.json()["data"]
        assert [m["username"] for m in data] == ["member1", "member2", "member3", "member4"]
        assert set(data[0]) == {"memberId", "username", "age", "teamId", "teamName"}

    async def test_search_with_criteria(self, client: AsyncClient, members):
        res = await client.get(
            f"{URL}/search", params={"teamName": "TeamB", "ageGoe": 20, "ageLoe": 45}
        )
        assert res.status_code == 200
        assert [m["username"] for m in res.json()["data"]] == ["member3", "member4"]

    async def test_blank_parameter_is_ignored(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search", params={"username": ""})
        assert len(res.json()["data"]) == 4

    async def test_search_with_team(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search/with-team", params={"teamName": "TeamA"})
        assert res.status_code == 200
        data = res.json()["data"]
        assert [m["username"] for m in data] == ["member1", "member2"]
        assert data[0]["team"]["name"] == "TeamA"


class TestPagedSearch:

    async def test_page_with_sort(self, client: AsyncClient, members):
        res = await client.get(
            f"{URL}/search/page",
            params={"page": 2, "size": 2, "sort": "username,desc", "mode": "simple"},
        )
        assert res.status_code == 200
        body = res.json()
        assert [m["username"] for m in body["data"]] == ["member2", "member1"]
        assert body["meta"] == {"total": 4, "page": 2, "size": 2, "pages": 2, "hasNext": False}

    async def test_optimized_first_page(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search/page", params={"teamName": "TeamB", "size": 10})
        body = res.json()
        assert [m["username"] for m in body["data"]] == ["member3", "member4"]
        assert body["meta"]["total"] == 2
        assert body["meta"]["pages"] == 1

    async def test_page_past_end_keeps_total(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search/page", params={"page": 5, "size": 2})
        body = res.json()
        assert body["data"] == []
        assert body["meta"]["total"] == 4

    async def test_unknown_sort_field(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search/page", params={"sort": "salary"})
        assert res.status_code == 422
        assert res.json()["error"]["code"] == "INVALID_ARGUMENT"

    async def test_bad_sort_direction(self, client: AsyncClient, members):
        res = await client.get(f"{URL}/search/page", params={"sort": "age,up"})
        assert res.status_code == 422
        assert res.json()["error"]["code"] == "INVALID_ARGUMENT"

    async def test_page_size_out_of_range(self, client: AsyncClient):
        res = await client.get(f"{URL}/search/page", params={"size": 0})
        assert res.status_code == 422


class TestRegistration:

    async def test_register_team_and_member(self, client: AsyncClient):
        res = await client.post("/api/v1/teams", json={"name": "TeamC"})
        assert res.status_code == 201
        team_id = res.json()["data"]["id"]

        res = await client.post(URL, json={"username": "member9", "age": 33, "teamId": team_id})
        assert res.status_code == 201
        member = res.json()["data"]
        assert member["teamId"] == team_id
        assert member["team"]["name"] == "TeamC"

        res = await client.get(f"{URL}/{member['id']}")
        assert res.status_code == 200
        assert res.json()["data"]["username"] == "member9"

    async def test_get_member_includes_team(self, client: AsyncClient, db, members):
        member_id = members[2].id
        db.expunge_all()

        res = await client.get(f"{URL}/{member_id}")

        assert res.status_code == 200
        data = res.json()["data"]
        assert data["teamId"] == data["team"]["id"]
        assert data["team"]["name"] == "TeamB"

    async def test_duplicate_team(self, client: AsyncClient, teams):
        res = await client.post("/api/v1/teams", json={"name": "TeamA"})
        assert res.status_code == 409
        assert res.json()["error"]["code"] == "CONFLICT"

    async def test_member_with_unknown_team(self, client: AsyncClient):
        res = await client.post(URL, json={"username": "ghost", "age": 1, "teamId": 999})
        assert res.status_code == 404

    async def test_unknown_member(self, client: AsyncClient):
        res = await client.get(f"{URL}/12345")
        assert res.status_code == 404
        assert res.json()["error"]["code"] == "NOT_FOUND"


async def test_health(client: AsyncClient):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"
