"""MongoDB association store.

Associations are documents ``{"uuid": ..., "url": ...}`` in one collection.
MongoDB's own ``_id`` is the document key; the short id is a secondary field
with a (non-unique) index.
"""

import logging
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .exceptions import StoreUnavailableError
from .store import AssociationStore
from ..models import URLAssociation

logger = logging.getLogger(__name__)

_PROJECTION = {"_id": False, "uuid": True, "url": True}


class MongoAssociationStore(AssociationStore):
    """Association store backed by a MongoDB collection."""

    def __init__(self, collection: Collection, client: Optional[MongoClient] = None):
        self.collection = collection
        self._client = client

    @classmethod
    def connect(
        cls,
        uri: str,
        database: str,
        collection: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout_ms: int = 5000,
    ) -> "MongoAssociationStore":
        """Connect to MongoDB and verify the server answers.

        Raises:
            StoreUnavailableError: If the server cannot be reached.
        """
        client = MongoClient(
            uri,
            username=username,
            password=password,
            serverSelectionTimeoutMS=timeout_ms,
        )
        try:
            client.admin.command("ping")
            coll = client[database][collection]
            coll.create_index([("uuid", ASCENDING)], name="idx_uuid")
        except PyMongoError as e:
            client.close()
            logger.error(f"MongoDB connection failed: {e}")
            raise StoreUnavailableError(f"Cannot connect to MongoDB at {uri}") from e
        logger.info(f"Connected to MongoDB collection {database}.{collection}")
        return cls(coll, client=client)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def _find_key(self, uuid: str):
        doc = self.collection.find_one({"uuid": uuid}, {"_id": True})
        return None if doc is None else doc["_id"]

    def list_all(self) -> list[URLAssociation]:
        try:
            return [URLAssociation(**doc) for doc in self.collection.find({}, _PROJECTION)]
        except PyMongoError as e:
            logger.error(f"Listing associations failed: {e}")
            raise StoreUnavailableError("Can not retrieve url associations") from e

    def find_by_id(self, uuid: str) -> Optional[URLAssociation]:
        try:
            doc = self.collection.find_one({"uuid": uuid}, _PROJECTION)
        except PyMongoError as e:
            logger.error(f"Lookup of {uuid} failed: {e}")
            raise StoreUnavailableError("Can not retrieve url association") from e
        return None if doc is None else URLAssociation(**doc)

    def insert(self, association: URLAssociation) -> None:
        try:
            self.collection.insert_one(association.model_dump())
        except PyMongoError as e:
            logger.error(f"Insert of {association.uuid} failed: {e}")
            raise StoreUnavailableError("Can not associate url") from e
        logger.info(f"Created short URL: {association.uuid}")

    def delete_by_id(self, uuid: str) -> bool:
        try:
            key = self._find_key(uuid)
            if key is None:
                return False
            self.collection.delete_one({"_id": key})
        except PyMongoError as e:
            logger.error(f"Delete of {uuid} failed: {e}")
            raise StoreUnavailableError("Can not disassociate url") from e
        logger.info(f"Deleted short URL: {uuid}")
        return True

    def update_target(self, uuid: str, url: str) -> bool:
        try:
            key = self._find_key(uuid)
            if key is None:
                return False
            self.collection.update_one({"_id": key}, {"$set": {"url": url}})
        except PyMongoError as e:
            logger.error(f"Update of {uuid} failed: {e}")
            raise StoreUnavailableError("Can not update url") from e
        logger.info(f"Updated URL: {uuid}")
        return True
