"""Association lifecycle: create, read, update and delete.

The service holds no state of its own besides the injected store; every call
goes to the store.
"""

import logging
from typing import Optional

from ..core.exceptions import AssociationNotFoundError, InvalidURLError
from ..core.store import AssociationStore
from ..models import URLAssociation
from ..utils.shortener import is_valid_url
from ..utils.xid import XIDGenerator, generate_id

logger = logging.getLogger(__name__)


class AssociationService:
    """Orchestrates association operations against a store."""

    def __init__(self, store: AssociationStore, generator: Optional[XIDGenerator] = None):
        self.store = store
        self._generate = generator.generate if generator is not None else generate_id

    def create(self, url: str) -> URLAssociation:
        """Mint a new short id for ``url`` and persist the association.

        Raises:
            InvalidURLError: If ``url`` is not an absolute URL.
            StoreUnavailableError: If the store write fails.
        """
        if not is_valid_url(url):
            raise InvalidURLError()
        association = URLAssociation(uuid=self._generate(), url=url)
        self.store.insert(association)
        return association

    def get(self, uuid: str) -> URLAssociation:
        association = self.store.find_by_id(uuid)
        if association is None:
            raise AssociationNotFoundError()
        return association

    def list(self) -> list[URLAssociation]:
        return self.store.list_all()

    def update(self, uuid: str, url: str) -> None:
        """Point ``uuid`` at ``url``; the id itself never changes.

        The URL is validated before the store is touched.
        """
        if not is_valid_url(url):
            raise InvalidURLError()
        if not self.store.update_target(uuid, url):
            raise AssociationNotFoundError()

    def delete(self, uuid: str) -> None:
        if not self.store.delete_by_id(uuid):
            raise AssociationNotFoundError()
