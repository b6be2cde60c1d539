import asyncio

import aiohttp
import pytest

from database import UNIQUE_ID, AppwriteStore
from errors import MalformedResponseError, StorageError


def test_create_document_posts_record_and_returns_id(config, fake_http) -> None:
    fake_http.respond(201, {"$id": "doc123", "$createdAt": "2024-04-01T05:35:00.000+00:00"})
    store = AppwriteStore(config)

    doc_id = asyncio.run(store.create_document({"topic": "Internet in Iran"}))

    assert doc_id == "doc123"
    call = fake_http.calls[0]
    assert call["url"] == (
        "https://cloud.appwrite.io/v1/databases/db-1/collections/reports/documents"
    )
    assert call["headers"]["X-Appwrite-Project"] == "proj-1"
    assert call["headers"]["X-Appwrite-Key"] == "aw-key"
    assert call["json"] == {"documentId": UNIQUE_ID, "data": {"topic": "Internet in Iran"}}


def test_custom_endpoint_is_used(config, fake_http) -> None:
    config.appwrite_endpoint = "https://appwrite.example.com/v1/"
    fake_http.respond(201, {"$id": "abc"})

    asyncio.run(AppwriteStore(config).create_document({}))

    assert fake_http.calls[0]["url"].startswith("https://appwrite.example.com/v1/databases/")


def test_rejected_document_raises_storage_error(config, fake_http) -> None:
    fake_http.respond(
        401,
        {"message": "The current user is not authorized to perform the requested action.",
         "code": 401, "type": "user_unauthorized"},
    )

    with pytest.raises(StorageError, match="not authorized") as exc_info:
        asyncio.run(AppwriteStore(config).create_document({}))

    assert exc_info.value.status == 401


def test_transport_failure_raises_storage_error(config, fake_http) -> None:
    fake_http.error = aiohttp.ClientConnectionError("connection refused")

    with pytest.raises(StorageError, match="connection refused") as exc_info:
        asyncio.run(AppwriteStore(config).create_document({}))

    assert exc_info.value.status is None


def test_missing_document_id_raises_malformed_response(config, fake_http) -> None:
    fake_http.respond(201, {"$collectionId": "reports"})

    with pytest.raises(MalformedResponseError):
        asyncio.run(AppwriteStore(config).create_document({}))
