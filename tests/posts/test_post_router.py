import pytest


@pytest.mark.asyncio
async def test_like_toggles_and_returns_count(client, headers_for):
    headers = headers_for(5)

    first = await client.post("/api/posts/42/like", headers=headers)
    second = await client.post("/api/posts/42/like", headers=headers)

    assert first.status_code == 200
    assert first.json() == {"liked": True, "likesCount": 1}
    assert second.json() == {"liked": False, "likesCount": 0}


@pytest.mark.asyncio
async def test_like_with_explicit_state(client, headers_for):
    headers = headers_for(5)

    await client.post("/api/posts/42/like", json={"liked": True}, headers=headers)
    response = await client.post("/api/posts/42/like", json={"liked": True}, headers=headers)
    assert response.json() == {"liked": True, "likesCount": 1}

    response = await client.delete("/api/posts/42/like", headers=headers)
    assert response.json() == {"liked": False, "likesCount": 0}


@pytest.mark.asyncio
async def test_anonymous_feed_entry_is_not_liked(client, headers_for):
    await client.post("/api/posts/42/like", headers=headers_for(1))

    response = await client.get("/api/posts/42")

    assert response.status_code == 200
    body = response.json()
    assert body["likesCount"] == 1
    assert body["isLiked"] is False
    assert body["isSaved"] is False


@pytest.mark.asyncio
async def test_viewer_sees_own_like(client, headers_for):
    await client.post("/api/posts/42/like", headers=headers_for(5))

    mine = await client.get("/api/posts/42", headers=headers_for(5))
    other = await client.get("/api/posts/42", headers=headers_for(4))

    assert mine.json()["isLiked"] is True
    assert other.json()["isLiked"] is False


@pytest.mark.asyncio
async def test_toggle_missing_post_returns_404(client, headers_for):
    response = await client.post("/api/posts/99999/like", headers=headers_for(5))

    assert response.status_code == 404
    assert response.json() == {"message": "Post não encontrado"}


@pytest.mark.asyncio
async def test_unauthenticated_toggle_returns_401(client):
    response = await client.post("/api/posts/42/like")

    assert response.status_code == 401
    assert response.json() == {"message": "Não autenticado"}


@pytest.mark.asyncio
async def test_invalid_token_returns_401(client):
    response = await client.post("/api/posts/42/save", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401
    assert response.json() == {"message": "Não autenticado"}


@pytest.mark.asyncio
async def test_malformed_post_id_returns_400(client, headers_for):
    response = await client.post("/api/posts/abc/like", headers=headers_for(5))

    assert response.status_code == 400
    assert "message" in response.json()


@pytest.mark.asyncio
async def test_saved_posts_contains_post_once(client, headers_for):
    headers = headers_for(5)

    saved = await client.post("/api/posts/42/save", headers=headers)
    assert saved.json() == {"saved": True}
    await client.post("/api/posts/42/like", headers=headers)

    response = await client.get("/api/posts/saved", headers=headers)

    assert response.status_code == 200
    posts = response.json()
    assert [post["id"] for post in posts] == [42]
    assert posts[0]["isSaved"] is True
    assert posts[0]["isLiked"] is True


@pytest.mark.asyncio
async def test_liked_posts(client, headers_for):
    await client.post("/api/posts/42/like", headers=headers_for(3))

    liked = await client.get("/api/posts/liked", headers=headers_for(3))
    empty = await client.get("/api/posts/liked", headers=headers_for(4))

    assert [post["id"] for post in liked.json()] == [42]
    assert empty.json() == []


@pytest.mark.asyncio
async def test_unsave(client, headers_for):
    headers = headers_for(5)
    await client.post("/api/posts/42/save", headers=headers)

    response = await client.delete("/api/posts/42/save", headers=headers)

    assert response.json() == {"saved": False}
    assert (await client.get("/api/posts/saved", headers=headers)).json() == []


@pytest.mark.asyncio
async def test_create_post_and_feed(client, headers_for):
    response = await client.post(
        "/api/posts",
        json={"content": "Feira de adoção sábado", "mediaUrls": ["http://example.com/a.png"], "postType": "event"},
        headers=headers_for(2),
    )

    assert response.status_code == 201
    created = response.json()
    assert created["userId"] == 2
    assert created["username"] == "user2"
    assert created["postType"] == "event"
    assert created["likesCount"] == 0
    assert created["commentsCount"] == 0

    feed = await client.get("/api/posts", params={"page": 1})

    assert feed.status_code == 200
    body = feed.json()
    assert [post["id"] for post in body["posts"]] == [created["id"], 42]
    assert body["next"] is None
    assert body["previous"] is None


@pytest.mark.asyncio
async def test_create_post_requires_content(client, headers_for):
    response = await client.post("/api/posts", json={"content": ""}, headers=headers_for(2))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_feed_hides_private_posts(client, headers_for):
    await client.post("/api/posts", json={"content": "só eu", "visibilityType": "private"}, headers=headers_for(2))

    feed = await client.get("/api/posts")

    assert [post["id"] for post in feed.json()["posts"]] == [42]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, url",
    [
        ("post", "/api/posts/99999999999999999999/like"),
        ("delete", "/api/posts/9223372036854775808/save"),
        ("get", "/api/posts/0"),
        ("get", "/api/posts/99999999999999999999/comments"),
        ("post", "/api/comments/99999999999999999999/toggle-like"),
        ("get", "/api/pets/99999999999999999999"),
        ("delete", "/api/interactions/99999999999999999999"),
        ("get", "/api/interactions/subject/post/99999999999999999999"),
        ("get", "/api/posts?page=99999999999999999999"),
        ("get", "/api/pets?page=0"),
    ],
)
async def test_out_of_range_ids_return_400(client, headers_for, method, url):
    response = await client.request(method, url, headers=headers_for(5))

    assert response.status_code == 400
    assert response.json()["message"] == "Dados inválidos"


@pytest.mark.asyncio
async def test_largest_id_is_accepted(client, headers_for):
    response = await client.post("/api/posts/9223372036854775807/like", headers=headers_for(5))

    assert response.status_code == 404
    assert response.json() == {"message": "Post não encontrado"}
