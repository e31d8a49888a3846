import logging
from typing import Any, Dict, List, Optional

from django.core.exceptions import FieldDoesNotExist
from django.db import DatabaseError, connections
from django.utils import timezone

from apps.errors import NotConnected, StoreError
from .models import GeneratedImage, ReferenceImage

logger = logging.getLogger(__name__)

# collection name -> (model, identity field)
COLLECTIONS = {
    'images': (ReferenceImage, 'image_id'),
    'generated_images': (GeneratedImage, 'artifact_id'),
}


class ArtifactStore:
    """
    Document-style access to the `images` and `generated_images` collections.

    Documents are plain dicts keyed by model field name. Filters are exact
    equality over top-level fields; there are no transactions spanning calls.
    The store must be opened before use and is shared by all requests.
    """

    def __init__(self, alias: str = 'default'):
        self.alias = alias
        self._connection = None

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def open(self):
        if self._connection is not None:
            logger.debug("Store already connected")
            return self
        connection = connections[self.alias]
        try:
            connection.ensure_connection()
        except DatabaseError as e:
            logger.error("Database connection error: %s", e)
            raise StoreError(f"Database connection failed: {e}") from e
        self._connection = connection
        logger.info("Connected to database '%s' (%s)", self.alias, connection.vendor)
        return self

    def close(self):
        if self._connection is None:
            return
        # a connection inside an atomic block belongs to whoever opened the block
        if not self._connection.in_atomic_block:
            self._connection.close()
        self._connection = None
        logger.info("Database connection closed")

    def insert(self, collection: str, document: Dict[str, Any]) -> str:
        model, identity_field = self._resolve(collection)
        self._check_fields(model, document)
        try:
            obj = model.objects.using(self.alias).create(**document)
        except DatabaseError as e:
            logger.error("Error writing to %s: %s", collection, e)
            raise StoreError(f"Failed to write to {collection}") from e
        identity = getattr(obj, identity_field)
        logger.info("Document inserted in %s: %s", collection, identity)
        return identity

    def find(self, collection: str, filter: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        model, _ = self._resolve(collection)
        query = self._filter(model, collection, filter)
        fields = self._document_fields(model)
        try:
            return list(query.values(*fields))
        except DatabaseError as e:
            logger.error("Error reading from %s: %s", collection, e)
            raise StoreError(f"Failed to read from {collection}") from e

    def update(self, collection: str, filter: Dict[str, Any], patch: Dict[str, Any]) -> int:
        model, _ = self._resolve(collection)
        self._check_fields(model, patch)
        query = self._filter(model, collection, filter)
        try:
            return query.update(**patch)
        except DatabaseError as e:
            logger.error("Error updating %s: %s", collection, e)
            raise StoreError(f"Failed to update {collection}") from e

    def remove(self, collection: str, filter: Dict[str, Any]) -> int:
        model, _ = self._resolve(collection)
        query = self._filter(model, collection, filter)
        try:
            _, per_model = query.delete()
        except DatabaseError as e:
            logger.error("Error deleting from %s: %s", collection, e)
            raise StoreError(f"Failed to delete from {collection}") from e
        return per_model.get(model._meta.label, 0)

    def count(self, collection: str, filter: Optional[Dict[str, Any]] = None) -> int:
        model, _ = self._resolve(collection)
        try:
            return self._filter(model, collection, filter).count()
        except DatabaseError as e:
            raise StoreError(f"Failed to count {collection}") from e

    def collections(self) -> List[str]:
        self._require_connection()
        return list(COLLECTIONS)

    def ping(self) -> Dict[str, Any]:
        """Health check; reports problems instead of raising them."""
        timestamp = timezone.now().isoformat()
        try:
            self._require_connection()
            with connections[self.alias].cursor() as cursor:
                cursor.execute("SELECT 1")
            return {'status': 'healthy', 'timestamp': timestamp}
        except (StoreError, DatabaseError) as e:
            return {'status': 'unhealthy', 'error': str(e), 'timestamp': timestamp}

    def _require_connection(self):
        if self._connection is None:
            raise NotConnected()

    def _resolve(self, collection):
        self._require_connection()
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise StoreError(f"Unknown collection: {collection}")

    def _filter(self, model, collection, filter):
        filter = filter or {}
        self._check_fields(model, filter)
        return model.objects.using(self.alias).filter(**filter)

    @staticmethod
    def _check_fields(model, document):
        for name in document:
            if '__' in name or name == 'seq':
                raise StoreError(f"Only exact matches on top-level fields are supported: {name}")
            try:
                model._meta.get_field(name)
            except FieldDoesNotExist:
                raise StoreError(f"Unknown field for {model._meta.db_table}: {name}")

    @staticmethod
    def _document_fields(model):
        return [f.name for f in model._meta.concrete_fields if f.name != 'seq']
