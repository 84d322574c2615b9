"""
Comment endpoint tests — covers the CRUD lifecycle, request validation,
author assignment from the caller identity, and the 404/204 contract of
the comment routes.
"""
import uuid

import pytest
from httpx import AsyncClient

NIL_GUID = "00000000-0000-0000-0000-000000000000"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _create_post(client: AsyncClient) -> str:
    resp = await client.post("/api/post", json={"title": "Commented post", "content": "Body"})
    assert resp.status_code == 200
    return resp.json()["id"]


async def _create_comment(client: AsyncClient, post_id: str, content: str = "Nice post!", **kwargs) -> str:
    resp = await client.post(
        "/api/comment", json={"content": content, "postId": post_id}, **kwargs
    )
    assert resp.status_code == 201
    return resp.json()["id"]


# ---------------------------------------------------------------------------
# Add comment — happy path
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_add_comment(async_client: AsyncClient):
    """Posting a comment returns 201, a message, the new id and a Location header."""
    post_id = await _create_post(async_client)

    resp = await async_client.post(
        "/api/comment", json={"content": "Great article!", "postId": post_id}
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Comment added successfully"
    assert resp.headers["location"] == f"/api/comment/{body['id']}"

    comment = (await async_client.get(f"/api/comment/{body['id']}")).json()
    assert comment["content"] == "Great article!"
    assert comment["postId"] == post_id
    assert comment["author"] == "Anonymous/System User"
    assert "createdAt" in comment
    assert "updatedAt" not in comment


@pytest.mark.asyncio
async def test_add_comment_author_from_caller_identity(async_client: AsyncClient):
    post_id = await _create_post(async_client)
    comment_id = await _create_comment(
        async_client, post_id, headers={"X-User-Name": "Reader"}
    )

    comment = (await async_client.get(f"/api/comment/{comment_id}")).json()
    assert comment["author"] == "Reader"


@pytest.mark.asyncio
async def test_add_comment_ignores_client_supplied_server_fields(async_client: AsyncClient):
    """id, timestamps and author in the body never reach the stored comment."""
    post_id = await _create_post(async_client)
    supplied_id = str(uuid.uuid4())

    resp = await async_client.post("/api/comment", json={
        "id": supplied_id,
        "postId": post_id,
        "content": "Trying to spoof fields",
        "author": "Impostor",
        "createdAt": "2000-01-01T00:00:00Z",
        "updatedAt": "2000-01-01T00:00:00Z",
    })
    assert resp.status_code == 201
    comment_id = resp.json()["id"]
    assert comment_id != supplied_id

    comment = (await async_client.get(f"/api/comment/{comment_id}")).json()
    assert comment["author"] == "Anonymous/System User"
    assert not comment["createdAt"].startswith("2000")


@pytest.mark.asyncio
async def test_comment_on_nonexistent_post_is_accepted(async_client: AsyncClient):
    """The post reference is stored by value and not checked."""
    resp = await async_client.post(
        "/api/comment", json={"content": "Orphan comment", "postId": str(uuid.uuid4())}
    )
    assert resp.status_code == 201


@pytest.mark.asyncio
async def test_list_comments(async_client: AsyncClient):
    post_id = await _create_post(async_client)
    for i in range(3):
        await _create_comment(async_client, post_id, content=f"Comment number {i}")

    resp = await async_client.get("/api/comment")
    assert resp.status_code == 200
    comments = resp.json()
    assert len(comments) == 3
    assert all(c["postId"] == post_id for c in comments)


# ---------------------------------------------------------------------------
# Add comment — validation
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_comment_content_too_short(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/comment", json={"content": "hi", "postId": str(uuid.uuid4())}
    )
    assert resp.status_code == 400
    body = resp.json()
    assert resp.headers["content-type"].startswith("application/problem+json")
    assert body["status"] == 400
    assert body["errors"]["content"] == ["Comment content too short."]


@pytest.mark.asyncio
async def test_comment_content_too_long(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/comment", json={"content": "x" * 501, "postId": str(uuid.uuid4())}
    )
    assert resp.status_code == 400
    assert resp.json()["errors"]["content"] == ["Comment limit exceeded."]


@pytest.mark.asyncio
async def test_comment_content_whitespace_only(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/comment", json={"content": "      ", "postId": str(uuid.uuid4())}
    )
    assert resp.status_code == 400
    assert resp.json()["errors"]["content"] == ["Comment content is required."]


@pytest.mark.asyncio
async def test_comment_nil_post_id(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/comment", json={"content": "Nice post!", "postId": NIL_GUID}
    )
    assert resp.status_code == 400
    assert resp.json()["errors"]["postId"] == [
        "PostId is required and cannot be an empty GUID."
    ]


@pytest.mark.asyncio
async def test_comment_missing_fields(async_client: AsyncClient):
    resp = await async_client.post("/api/comment", json={})
    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert "content" in errors
    assert "postId" in errors


@pytest.mark.asyncio
async def test_comment_snake_case_post_id_error_keyed_camel_case(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/comment", json={"content": "Nice post!", "post_id": NIL_GUID}
    )
    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert errors == {"postId": ["PostId is required and cannot be an empty GUID."]}


@pytest.mark.asyncio
async def test_comment_snake_case_post_id_accepted(async_client: AsyncClient):
    post_id = str(uuid.uuid4())
    resp = await async_client.post(
        "/api/comment", json={"content": "Nice post!", "post_id": post_id}
    )
    assert resp.status_code == 201
    comment = (await async_client.get(f"/api/comment/{resp.json()['id']}")).json()
    assert comment["postId"] == post_id


@pytest.mark.asyncio
async def test_comment_malformed_json_body(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/comment",
        content=b'{"content": "Nice post!", ',
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert list(errors) == ["body"]


# ---------------------------------------------------------------------------
# Get / update / delete
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_unknown_comment_returns_404(async_client: AsyncClient):
    missing = uuid.uuid4()
    resp = await async_client.get(f"/api/comment/{missing}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == f"Comment with id: {missing} not found"


@pytest.mark.asyncio
async def test_update_comment_changes_content_only(async_client: AsyncClient):
    post_id = await _create_post(async_client)
    comment_id = await _create_comment(async_client, post_id, content="Original text")

    other_post = str(uuid.uuid4())
    resp = await async_client.put(
        f"/api/comment/{comment_id}", json={"content": "Edited text", "postId": other_post}
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "Comment updated successfully"

    comment = (await async_client.get(f"/api/comment/{comment_id}")).json()
    assert comment["content"] == "Edited text"
    assert comment["postId"] == post_id


@pytest.mark.asyncio
async def test_update_unknown_comment_returns_404(async_client: AsyncClient):
    resp = await async_client.put(
        f"/api/comment/{uuid.uuid4()}", json={"content": "Edited text", "postId": str(uuid.uuid4())}
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_comment_is_validated(async_client: AsyncClient):
    post_id = await _create_post(async_client)
    comment_id = await _create_comment(async_client, post_id)

    resp = await async_client.put(
        f"/api/comment/{comment_id}", json={"content": "no", "postId": post_id}
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_delete_comment(async_client: AsyncClient):
    post_id = await _create_post(async_client)
    comment_id = await _create_comment(async_client, post_id)

    resp = await async_client.delete(f"/api/comment/{comment_id}")
    assert resp.status_code == 204
    assert resp.content == b""

    resp = await async_client.delete(f"/api/comment/{comment_id}")
    assert resp.status_code == 404
