import pytest

from tests.helpers import auth_headers

POSTS_URL = "/api/posts"


async def _create(client, user, content="Anyone up for a lunch run?"):
    response = await client.post(POSTS_URL, json={"content": content}, headers=auth_headers(user))
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_feed_requires_authentication(client):
    assert (await client.get(POSTS_URL)).status_code == 401


@pytest.mark.asyncio
async def test_create_and_list_posts(client, member, other_member):
    first = await _create(client, member)
    second = await _create(client, other_member, "Printer on floor 2 is fixed")

    feed = await client.get(POSTS_URL, headers=auth_headers(member))

    assert first["authorName"] == "Asha Rao"
    assert first["comments"] == []
    assert [p["id"] for p in feed.json()] == [second["id"], first["id"]]


@pytest.mark.asyncio
async def test_blank_post_is_rejected(client, member):
    response = await client.post(POSTS_URL, json={"content": "   "}, headers=auth_headers(member))

    assert response.status_code == 400
    assert response.json() == {"message": "Content is required"}


@pytest.mark.asyncio
async def test_upvote_toggles(client, member, other_member):
    post = await _create(client, member)
    url = f"{POSTS_URL}/{post['id']}/upvote"

    liked = await client.post(url, headers=auth_headers(other_member))
    unliked = await client.post(url, headers=auth_headers(other_member))

    assert liked.json()["upvotes"] == [str(other_member.id)]
    assert unliked.json()["upvotes"] == []


@pytest.mark.asyncio
async def test_comments_and_replies(client, member, other_member):
    post = await _create(client, member)

    commented = await client.post(
        f"{POSTS_URL}/{post['id']}/comments", json={"text": "Count me in"}, headers=auth_headers(other_member)
    )
    assert commented.status_code == 201
    comment = commented.json()["comments"][0]
    assert comment["userName"] == "Vikram Shah"

    replied = await client.post(
        f"{POSTS_URL}/{post['id']}/comments/{comment['id']}/replies",
        json={"text": "1pm at the lobby"},
        headers=auth_headers(member),
    )
    assert replied.status_code == 201
    assert [r["text"] for r in replied.json()["comments"][0]["replies"]] == ["1pm at the lobby"]

    upvoted = await client.post(
        f"{POSTS_URL}/{post['id']}/comments/{comment['id']}/upvote", headers=auth_headers(member)
    )
    assert upvoted.json()["comments"][0]["upvotes"] == [str(member.id)]

    blank = await client.post(
        f"{POSTS_URL}/{post['id']}/comments/{comment['id']}/replies", json={"text": ""}, headers=auth_headers(member)
    )
    assert blank.json() == {"message": "Reply text is required"}

    forbidden = await client.delete(f"{POSTS_URL}/{post['id']}/comments/{comment['id']}", headers=auth_headers(member))
    assert forbidden.status_code == 403

    deleted = await client.delete(
        f"{POSTS_URL}/{post['id']}/comments/{comment['id']}", headers=auth_headers(other_member)
    )
    assert deleted.json()["comments"] == []


@pytest.mark.asyncio
async def test_only_author_or_admin_deletes_a_post(client, member, other_member, admin):
    post = await _create(client, member)
    other = await _create(client, member, "Second post")

    assert (await client.delete(f"{POSTS_URL}/{post['id']}", headers=auth_headers(other_member))).status_code == 403
    assert (await client.delete(f"{POSTS_URL}/{post['id']}", headers=auth_headers(member))).json() == {
        "message": "Post removed"
    }
    assert (await client.delete(f"{POSTS_URL}/{other['id']}", headers=auth_headers(admin))).status_code == 200
    assert (await client.delete(f"{POSTS_URL}/{other['id']}", headers=auth_headers(admin))).status_code == 404
