"""Document store for persisted report records.

Records go to an Appwrite database collection through the Appwrite REST
API. Each call creates exactly one document with a server-generated id;
there is no update-if-exists path, so repeated runs create duplicates.

Request:
    POST {endpoint}/databases/{database_id}/collections/{collection_id}/documents
    X-Appwrite-Project: <project id>
    X-Appwrite-Key: <api key>
    {"documentId": "unique()", "data": {...}}

Response (201):
    {"$id": "...", "$createdAt": "...", ...fields}
"""

import json
import logging
from typing import Any

import aiohttp

from config import Config
from errors import MalformedResponseError, StorageError
from tools.utils import create_ssl_context

logger = logging.getLogger(__name__)

# Appwrite asks the server to generate the document id
UNIQUE_ID = "unique()"


async def _read_error_message(resp: aiohttp.ClientResponse) -> str:
    """Extract Appwrite's error message, falling back to the raw body."""
    body = await resp.text()
    try:
        payload = json.loads(body)
    except ValueError:
        return body or f"HTTP {resp.status}"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return body


class AppwriteStore:
    """Creates report documents in a configured Appwrite collection.

    Example:
        >>> store = AppwriteStore(config)
        >>> doc_id = await store.create_document(record.to_document())
    """

    def __init__(self, config: Config):
        self.endpoint = config.appwrite_endpoint.rstrip("/")
        self.project_id = config.appwrite_project_id
        self.api_key = config.appwrite_api_key
        self.database_id = config.appwrite_db_id
        self.collection_id = config.appwrite_collection_id

    @property
    def documents_url(self) -> str:
        return (
            f"{self.endpoint}/databases/{self.database_id}"
            f"/collections/{self.collection_id}/documents"
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-Appwrite-Project": self.project_id,
            "X-Appwrite-Key": self.api_key,
        }

    async def create_document(self, data: dict[str, Any]) -> str:
        """Create one document and return its store-assigned id.

        Args:
            data: Field map of the document

        Returns:
            The new document's ``$id``

        Raises:
            StorageError: If the store rejects the document or is unreachable
            MalformedResponseError: If a successful reply has no ``$id``
        """
        payload = {"documentId": UNIQUE_ID, "data": data}

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    self.documents_url,
                    json=payload,
                    headers=self._headers(),
                    ssl=create_ssl_context(),
                ) as resp:
                    if resp.status >= 300:
                        message = await _read_error_message(resp)
                        logger.warning(
                            "Document create rejected | status=%d collection=%s",
                            resp.status, self.collection_id,
                        )
                        raise StorageError(message, status=resp.status)
                    try:
                        body = await resp.json(content_type=None)
                    except ValueError as e:
                        raise MalformedResponseError("Appwrite", "response body is not JSON") from e
        except aiohttp.ClientError as e:
            raise StorageError(f"{type(e).__name__}: {e}") from e

        doc_id = body.get("$id") if isinstance(body, dict) else None
        if not doc_id:
            raise MalformedResponseError("Appwrite", "created document has no $id")

        logger.info("Document created | id=%s collection=%s", doc_id, self.collection_id)
        return doc_id
