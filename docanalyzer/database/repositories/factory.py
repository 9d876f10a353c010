from docanalyzer.config.exceptions import ConfigurationError
from docanalyzer.config.settings import Settings
from docanalyzer.database.repositories.base import BaseDocumentRepository
from docanalyzer.database.repositories.document_repository import DocumentRepository
from docanalyzer.database.repositories.memory_repository import InMemoryDocumentRepository


class DocumentRepositoryFactory:
    """Creates the record store named by the DOCUMENT_STORE setting."""

    STORES: dict[str, type[BaseDocumentRepository]] = {
        "postgres": DocumentRepository,
        "memory": InMemoryDocumentRepository,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentRepository:
        store = settings.document_store.lower()
        store_cls = cls.STORES.get(store)
        if store_cls is None:
            raise ConfigurationError(
                f"Unknown document store '{store}'. Choose from: {list(cls.STORES)}"
            )
        return store_cls()
