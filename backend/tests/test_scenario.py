"""
Postboard Backend — End-to-End Scenario
=========================================

One user walks through the whole API: register, log in, post, comment,
edit, and clean up. Catches wiring mistakes that per-endpoint tests miss.
"""

import pytest


class TestBlogScenario:

    @pytest.mark.asyncio
    async def test_full_flow(self, client):
        registered = await client.post(
            "/users", json={"username": "alice", "email": "a@x.com", "password": "secret1"}
        )
        assert registered.status_code == 200
        assert registered.json()["user"] == {"username": "alice", "email": "a@x.com"}

        login = await client.post("/login", json={"username": "alice", "password": "secret1"})
        assert login.status_code == 200
        headers = {"Authorization": f"Bearer {login.json()['token']}"}

        created = await client.post("/posts", json={"title": "Hello", "content": "World"},
                                    headers=headers)
        assert created.status_code == 201
        post = created.json()["post"]
        assert post["author"]["username"] == "alice"

        commented = await client.post(f"/posts/{post['id']}/comments",
                                      json={"content": "Nice post"}, headers=headers)
        assert commented.status_code == 200
        comment_id = commented.json()["comment"]["id"]

        listing = await client.get("/posts")
        assert listing.json()["pagination"]["total"] == 1
        assert listing.json()["posts"][0]["id"] == post["id"]

        comments = await client.get(f"/posts/{post['id']}/comments")
        assert [c["id"] for c in comments.json()["comments"]] == [comment_id]

        edited = await client.put(f"/posts/{post['id']}",
                                  json={"title": "Hello again", "content": "World"},
                                  headers=headers)
        assert edited.json()["post"]["title"] == "Hello again"

        assert (await client.delete(f"/comments/{comment_id}", headers=headers)).status_code == 200
        assert (await client.delete(f"/posts/{post['id']}", headers=headers)).status_code == 200

        final = await client.get("/posts")
        assert final.json()["posts"] == []
        assert final.json()["pagination"]["totalPages"] == 0
