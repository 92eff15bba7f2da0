"""Document Store - In-memory storage for uploaded documents."""

import logging
from collections import OrderedDict
from threading import Lock
from typing import Any, List, Optional

from lexbrief.core.config import Settings, get_settings
from lexbrief.models.document import Document

logger = logging.getLogger(__name__)


class DocumentStore:
    """In-memory store for uploaded documents and summary ids."""

    _instance: Optional["DocumentStore"] = None
    _lock = Lock()

    def __new__(cls, *args: Any, **kwargs: Any) -> "DocumentStore":
        """Singleton pattern for store."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self, settings: Optional[Settings] = None) -> None:
        if self._initialized:
            return

        self.max_documents = (settings or get_settings()).max_documents
        self._documents: "OrderedDict[str, Document]" = OrderedDict()
        self._last_summary_id = 0
        self._initialized = True

        logger.info("DocumentStore initialized")

    @classmethod
    def reset(cls) -> None:
        """Reset singleton instance (useful for testing)."""
        with cls._lock:
            if cls._instance:
                cls._instance._documents.clear()
                cls._instance._last_summary_id = 0
            cls._instance = None

    def add(self, document: Document) -> Document:
        """Store a document, evicting the oldest ones beyond `max_documents`."""
        with self._lock:
            self._documents[document.id] = document
            while len(self._documents) > self.max_documents:
                evicted_id, _ = self._documents.popitem(last=False)
                logger.info(f"Evicted document {evicted_id}, store is full")
        logger.debug(f"Stored document {document.id} ({document.filename})")
        return document

    def get(self, document_id: str) -> Optional[Document]:
        return self._documents.get(document_id)

    def list(self) -> List[Document]:
        return list(self._documents.values())

    def next_summary_id(self) -> int:
        """Allocate the next summary id (1, 2, 3, ...)."""
        with self._lock:
            self._last_summary_id += 1
            return self._last_summary_id

    @property
    def documents_count(self) -> int:
        return len(self._documents)


# Convenience function for dependency injection
def get_document_store() -> DocumentStore:
    """Get the singleton store instance."""
    return DocumentStore()
