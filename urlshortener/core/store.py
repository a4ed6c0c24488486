"""Association store contract and the in-memory store.

Stores are looked up by the ``uuid`` field, which is not the native key of
the underlying engine. Lookups are limited to one result and every mutation
of an existing record is a two-step protocol: find the record by ``uuid``,
then act on the record that was found. The two steps are not wrapped in a
transaction, so a concurrent update and delete of the same id may race.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Optional

from ..models import URLAssociation

logger = logging.getLogger(__name__)


class AssociationStore(ABC):
    """Interface for URL association stores.

    Methods:
        list_all() -> list[URLAssociation]:
            Return every stored association, in no particular order.

        find_by_id(uuid) -> URLAssociation | None:
            Return the association with this id, or None.

        insert(association) -> None:
            Append a new association.

        delete_by_id(uuid) -> bool:
            Remove the association with this id. False if none matched.

        update_target(uuid, url) -> bool:
            Replace only the url of the association with this id.
            False if none matched.

    All methods raise StoreUnavailableError when the store cannot be reached.
    """

    @abstractmethod
    def list_all(self) -> list[URLAssociation]:
        pass

    @abstractmethod
    def find_by_id(self, uuid: str) -> Optional[URLAssociation]:
        pass

    @abstractmethod
    def insert(self, association: URLAssociation) -> None:
        pass

    @abstractmethod
    def delete_by_id(self, uuid: str) -> bool:
        pass

    @abstractmethod
    def update_target(self, uuid: str, url: str) -> bool:
        pass

    def close(self) -> None:
        """Release the underlying connection."""


class MemoryAssociationStore(AssociationStore):
    """Process-local store backed by a list."""

    def __init__(self, associations: Optional[list[URLAssociation]] = None):
        self._associations = list(associations or [])
        self._lock = threading.Lock()

    def _locate(self, uuid: str) -> Optional[int]:
        for index, association in enumerate(self._associations):
            if association.uuid == uuid:
                return index
        return None

    def list_all(self) -> list[URLAssociation]:
        with self._lock:
            return [a.model_copy() for a in self._associations]

    def find_by_id(self, uuid: str) -> Optional[URLAssociation]:
        with self._lock:
            index = self._locate(uuid)
            return None if index is None else self._associations[index].model_copy()

    def insert(self, association: URLAssociation) -> None:
        with self._lock:
            self._associations.append(association.model_copy())
        logger.info(f"Created short URL: {association.uuid}")

    def delete_by_id(self, uuid: str) -> bool:
        with self._lock:
            index = self._locate(uuid)
            if index is None:
                return False
            del self._associations[index]
        logger.info(f"Deleted short URL: {uuid}")
        return True

    def update_target(self, uuid: str, url: str) -> bool:
        with self._lock:
            index = self._locate(uuid)
            if index is None:
                return False
            self._associations[index] = self._associations[index].model_copy(
                update={"url": url}
            )
        logger.info(f"Updated URL: {uuid}")
        return True
