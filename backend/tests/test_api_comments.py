"""
Postboard Backend — Comment API Tests
=======================================

What:  Comment create/list under a post, edit/delete by comment id.
"""

import uuid

import pytest


@pytest.fixture
def post_for(client):
    async def _post_for(headers):
        response = await client.post("/posts", json={"title": "T", "content": "C"},
                                     headers=headers)
        return response.json()["post"]["id"]

    return _post_for


class TestCreateComment:

    @pytest.mark.asyncio
    async def test_comment_on_post(self, client, register_and_login, post_for):
        alice = await register_and_login("alice")
        post_id = await post_for(alice)

        response = await client.post(f"/posts/{post_id}/comments",
                                     json={"content": "first!"}, headers=alice)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Comment successfully posted"
        assert body["comment"]["content"] == "first!"
        assert body["comment"]["postId"] == post_id
        assert body["comment"]["author"]["username"] == "alice"

    @pytest.mark.asyncio
    async def test_missing_content(self, client, register_and_login, post_for):
        alice = await register_and_login("alice")
        post_id = await post_for(alice)

        response = await client.post(f"/posts/{post_id}/comments", json={}, headers=alice)

        assert response.status_code == 400
        assert response.json()["error"] == "Content is required"

    @pytest.mark.asyncio
    async def test_unknown_post(self, client, register_and_login):
        alice = await register_and_login("alice")
        response = await client.post(f"/posts/{uuid.uuid4()}/comments",
                                     json={"content": "hi"}, headers=alice)

        assert response.status_code == 404
        assert response.json()["error"] == "Post not found"

    @pytest.mark.asyncio
    async def test_requires_token(self, client, register_and_login, post_for):
        alice = await register_and_login("alice")
        post_id = await post_for(alice)

        response = await client.post(f"/posts/{post_id}/comments", json={"content": "hi"})
        assert response.status_code == 401
        assert response.json()["error"] == "No token provided"


class TestListComments:

    @pytest.mark.asyncio
    async def test_list_is_scoped_to_post(self, client, register_and_login, post_for):
        alice = await register_and_login("alice")
        first = await post_for(alice)
        second = await post_for(alice)
        for i in range(3):
            await client.post(f"/posts/{first}/comments", json={"content": f"c{i}"}, headers=alice)
        await client.post(f"/posts/{second}/comments", json={"content": "other"}, headers=alice)

        response = await client.get(f"/posts/{first}/comments", params={"limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert len(body["comments"]) == 2
        assert all(c["postId"] == first for c in body["comments"])
        assert body["pagination"] == {"currentPage": 1, "totalPages": 2, "total": 3, "perPage": 2}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("post_id", [str(uuid.uuid4()), "nope"])
    async def test_unknown_post_is_empty_page(self, client, post_id):
        response = await client.get(f"/posts/{post_id}/comments")

        assert response.status_code == 200
        assert response.json()["comments"] == []
        assert response.json()["pagination"]["total"] == 0


class TestEditAndDelete:

    @pytest.mark.asyncio
    async def test_author_edits_and_deletes(self, client, register_and_login, post_for):
        alice = await register_and_login("alice")
        post_id = await post_for(alice)
        created = await client.post(f"/posts/{post_id}/comments",
                                    json={"content": "draft"}, headers=alice)
        comment_id = created.json()["comment"]["id"]

        edited = await client.put(f"/comments/{comment_id}",
                                  json={"content": "final"}, headers=alice)
        assert edited.status_code == 200
        assert edited.json()["message"] == "Comment successfully saved"
        assert edited.json()["comment"]["content"] == "final"

        deleted = await client.delete(f"/comments/{comment_id}", headers=alice)
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Comment successfully deleted"}

        listing = await client.get(f"/posts/{post_id}/comments")
        assert listing.json()["comments"] == []

    @pytest.mark.asyncio
    async def test_other_user_forbidden(self, client, register_and_login, post_for):
        alice = await register_and_login("alice")
        bob = await register_and_login("bob")
        post_id = await post_for(alice)
        created = await client.post(f"/posts/{post_id}/comments",
                                    json={"content": "mine"}, headers=alice)
        comment_id = created.json()["comment"]["id"]

        edit = await client.put(f"/comments/{comment_id}", json={"content": "x"}, headers=bob)
        delete = await client.delete(f"/comments/{comment_id}", headers=bob)

        assert edit.status_code == 403
        assert edit.json()["error"] == "User unauthorized"
        assert delete.status_code == 403
        assert delete.json()["error"] == "User is unauthorised."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("comment_id", [str(uuid.uuid4()), "bad-id"])
    async def test_delete_missing_comment(self, client, register_and_login, comment_id):
        alice = await register_and_login("alice")

        response = await client.delete(f"/comments/{comment_id}", headers=alice)

        assert response.status_code == 404
        assert response.json()["error"] == "The comment was not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("comment_id", [str(uuid.uuid4()), "bad-id"])
    async def test_update_missing_comment(self, client, register_and_login, comment_id):
        alice = await register_and_login("alice")

        response = await client.put(f"/comments/{comment_id}",
                                    json={"content": "x"}, headers=alice)

        assert response.status_code == 404
        assert response.json()["error"] == "Comment was not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"content": ""}, {"content": None}])
    async def test_update_requires_content(self, client, register_and_login, post_for, payload):
        alice = await register_and_login("alice")
        post_id = await post_for(alice)
        created = await client.post(f"/posts/{post_id}/comments",
                                    json={"content": "draft"}, headers=alice)
        comment_id = created.json()["comment"]["id"]

        response = await client.put(f"/comments/{comment_id}", json=payload, headers=alice)

        assert response.status_code == 400
        assert response.json()["error"] == "Content is required"

    @pytest.mark.asyncio
    async def test_update_validates_before_lookup_and_ownership(
        self, client, register_and_login, post_for
    ):
        alice = await register_and_login("alice")
        bob = await register_and_login("bob")
        post_id = await post_for(alice)
        created = await client.post(f"/posts/{post_id}/comments",
                                    json={"content": "mine"}, headers=alice)
        comment_id = created.json()["comment"]["id"]

        missing = await client.put(f"/comments/{uuid.uuid4()}", json={}, headers=alice)
        not_owner = await client.put(f"/comments/{comment_id}", json={}, headers=bob)

        assert missing.status_code == 400
        assert not_owner.status_code == 400
        assert not_owner.json()["error"] == "Content is required"


class TestCommentPagination:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page", ["2", "99999999999999999999"])
    async def test_page_past_the_end_is_empty(self, client, register_and_login, post_for, page):
        alice = await register_and_login("alice")
        post_id = await post_for(alice)
        await client.post(f"/posts/{post_id}/comments", json={"content": "only"}, headers=alice)

        response = await client.get(f"/posts/{post_id}/comments", params={"page": page})

        assert response.status_code == 200
        assert response.json()["comments"] == []
        assert response.json()["pagination"]["total"] == 1
