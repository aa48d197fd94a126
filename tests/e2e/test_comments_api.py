"""End-to-end tests for comment endpoints."""

from uuid import uuid4

import pytest
from dishka import AsyncContainer
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from wishyork.config import Settings
from wishyork.domain.repository import ContentRepository
from wishyork.domain.service import JWTService
from wishyork.domain.value import ContentType
from wishyork.interface.api.app import create_app
from wishyork.persistence.repository.inmemory import InMemoryDocumentStore
from tests.conftest import make_content, make_content_ref
from tests.di import build_test_container


@pytest.fixture
def container() -> AsyncContainer:
    return build_test_container(None, FastapiProvider())


@pytest.fixture
def client(container):
    """Create test client with test container."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


def _token(username: str = "alice") -> tuple[str, str]:
    """Mint a session token; returns (user_id, token)."""
    user_id = str(uuid4())
    jwt_service = JWTService(auth_settings=Settings().auth)
    return user_id, jwt_service.create_token(user_id, username=username, name="A")


def _seed(client: TestClient, container: AsyncContainer, collection: str) -> str:
    """Create a post or wishlist through the app's container; returns its id."""
    content = make_content(make_content_ref(ContentType(collection[:-1])))

    async def save():
        async with container() as request_container:
            content_repo = await request_container.get(ContentRepository)
            await content_repo.save(content)

    client.portal.call(save)
    return str(content.ref.id)


def _store(client: TestClient, container: AsyncContainer) -> InMemoryDocumentStore:
    async def get():
        return await container.get(InMemoryDocumentStore)

    return client.portal.call(get)


class TestReadComments:
    """GET endpoints."""

    def test_health(self, client):
        # Act
        response = client.get("/health")

        # Assert
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_missing_content_returns_404(self, client):
        # Act
        response = client.get(f"/wishlists/{uuid4()}/comments")

        # Assert
        assert response.status_code == 404

    def test_unknown_collection_returns_422(self, client):
        # Act
        response = client.get(f"/causes/{uuid4()}/comments")

        # Assert
        assert response.status_code == 422

    def test_malformed_content_id_returns_400(self, client):
        # Act
        response = client.get("/posts/not-a-uuid/comments")

        # Assert
        assert response.status_code == 400

    def test_empty_thread(self, client, container):
        # Arrange
        content_id = _seed(client, container, "posts")

        # Act
        response = client.get(f"/posts/{content_id}/comments")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["threads"] == []
        assert body["total"] == 0
        assert body["content_type"] == "post"

    def test_stream_for_missing_content_returns_404(self, client):
        # Act
        response = client.get(f"/posts/{uuid4()}/comments/stream")

        # Assert
        assert response.status_code == 404


class TestAddComment:
    """POST /{collection}/{id}/comments."""

    def test_add_requires_authentication(self, client, container):
        # Arrange
        content_id = _seed(client, container, "wishlists")

        # Act
        response = client.post(
            f"/wishlists/{content_id}/comments", json={"text": "Hello"}
        )

        # Assert
        assert response.status_code == 401

    def test_invalid_token_is_rejected(self, client, container):
        # Arrange
        content_id = _seed(client, container, "wishlists")

        # Act
        response = client.post(
            f"/wishlists/{content_id}/comments",
            json={"text": "Hello"},
            cookies={"auth_token": "invalid-token"},
        )

        # Assert
        assert response.status_code == 401

    def test_comment_and_reply_appear_in_thread(self, client, container):
        # Arrange
        content_id = _seed(client, container, "wishlists")
        _, alice = _token("alice")
        _, bob = _token("bob")

        # Act
        parent = client.post(
            f"/wishlists/{content_id}/comments",
            json={"text": "Love the blender"},
            cookies={"auth_token": alice},
        )
        reply = client.post(
            f"/wishlists/{content_id}/comments",
            json={"text": "Me too", "parent_id": parent.json()["comment"]["comment_id"]},
            cookies={"auth_token": bob},
        )
        thread = client.get(f"/wishlists/{content_id}/comments")

        # Assert
        assert parent.status_code == 201
        assert reply.status_code == 201
        assert reply.json()["comment"]["parent_author_username"] == "alice"
        body = thread.json()
        assert body["total"] == 2
        [top] = body["threads"]
        assert top["comment"]["text"] == "Love the blender"
        assert top["comment"]["reply_count"] == 1
        assert [r["author_username"] for r in top["replies"]] == ["bob"]

    def test_reply_to_reply_returns_409(self, client, container):
        # Arrange
        content_id = _seed(client, container, "posts")
        _, token = _token()
        url = f"/posts/{content_id}/comments"
        parent = client.post(url, json={"text": "P"}, cookies={"auth_token": token})
        reply = client.post(
            url,
            json={"text": "R", "parent_id": parent.json()["comment"]["comment_id"]},
            cookies={"auth_token": token},
        )

        # Act
        response = client.post(
            url,
            json={"text": "RR", "parent_id": reply.json()["comment"]["comment_id"]},
            cookies={"auth_token": token},
        )

        # Assert
        assert response.status_code == 409
        assert client.get(url).json()["total"] == 2

    @pytest.mark.parametrize("text", ["   ", "x" * 301])
    def test_invalid_text_returns_400(self, client, container, text):
        # Arrange
        content_id = _seed(client, container, "posts")
        _, token = _token()

        # Act
        response = client.post(
            f"/posts/{content_id}/comments",
            json={"text": text},
            cookies={"auth_token": token},
        )

        # Assert
        assert response.status_code == 400

    def test_store_failure_returns_503_and_writes_nothing(self, client, container):
        # Arrange
        content_id = _seed(client, container, "posts")
        _, token = _token()
        _store(client, container).fail_next_commit()

        # Act
        response = client.post(
            f"/posts/{content_id}/comments",
            json={"text": "Hello"},
            cookies={"auth_token": token},
        )

        # Assert
        assert response.status_code == 503
        assert client.get(f"/posts/{content_id}/comments").json()["total"] == 0


class TestDeleteAndReport:
    """DELETE and report endpoints."""

    def test_only_author_can_delete(self, client, container):
        # Arrange
        content_id = _seed(client, container, "posts")
        _, author = _token("alice")
        _, other = _token("mallory")
        url = f"/posts/{content_id}/comments"
        created = client.post(url, json={"text": "Mine"}, cookies={"auth_token": author})
        comment_id = created.json()["comment"]["comment_id"]

        # Act
        response = client.delete(f"{url}/{comment_id}", cookies={"auth_token": other})

        # Assert
        assert response.status_code == 403
        assert client.get(url).json()["total"] == 1

    def test_delete_cascades_to_replies(self, client, container):
        # Arrange
        content_id = _seed(client, container, "posts")
        _, author = _token("alice")
        _, friend = _token("bob")
        url = f"/posts/{content_id}/comments"
        created = client.post(url, json={"text": "P"}, cookies={"auth_token": author})
        comment_id = created.json()["comment"]["comment_id"]
        for text in ("R1", "R2"):
            client.post(
                url,
                json={"text": text, "parent_id": comment_id},
                cookies={"auth_token": friend},
            )

        # Act
        response = client.delete(f"{url}/{comment_id}", cookies={"auth_token": author})

        # Assert
        assert response.status_code == 200
        assert response.json()["removed"] == 3
        assert client.get(url).json() == {
            "content_type": "post",
            "content_id": content_id,
            "threads": [],
            "total": 0,
        }

    def test_delete_missing_comment_returns_404(self, client, container):
        # Arrange
        content_id = _seed(client, container, "posts")
        _, token = _token()

        # Act
        response = client.delete(
            f"/posts/{content_id}/comments/{uuid4()}", cookies={"auth_token": token}
        )

        # Assert
        assert response.status_code == 404

    def test_report_comment(self, client, container):
        # Arrange
        content_id = _seed(client, container, "wishlists")
        _, author = _token("alice")
        _, reporter = _token("bob")
        url = f"/wishlists/{content_id}/comments"
        created = client.post(url, json={"text": "Spam"}, cookies={"auth_token": author})
        comment_id = created.json()["comment"]["comment_id"]

        # Act
        response = client.post(
            f"{url}/{comment_id}/reports", cookies={"auth_token": reporter}
        )

        # Assert
        assert response.status_code == 201
        assert response.json()["status"] == "new"
        assert response.json()["comment_id"] == comment_id
