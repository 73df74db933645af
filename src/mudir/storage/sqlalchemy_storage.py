"""SQLAlchemy-backed document storage."""

from sqlalchemy.exc import SQLAlchemyError

from mudir.domain.errors import StorageError
from mudir.storage.base import DocumentStorage
from mudir.storage.models import Document, create_session_factory

DEFAULT_DOCUMENT_NAME = "state"


class SQLAlchemyStorage(DocumentStorage):
    """Keeps the JSON document as a single row of the documents table."""

    def __init__(self, database_url: str, document_name: str = DEFAULT_DOCUMENT_NAME):
        """Initialize SQLAlchemy storage.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
            document_name: Row name the document is stored under
        """
        self.database_url = database_url
        self.document_name = document_name
        self.session_factory = create_session_factory(database_url)

    @property
    def location(self) -> str:
        return self.database_url

    def _get(self, session):
        return (
            session.query(Document)
            .filter(Document.name == self.document_name)
            .first()
        )

    def exists(self) -> bool:
        try:
            with self.session_factory() as session:
                return self._get(session) is not None
        except SQLAlchemyError as e:
            raise StorageError(f"Could not query {self.database_url}: {e}") from e

    def read_text(self) -> str:
        try:
            with self.session_factory() as session:
                document = self._get(session)
                if document is None:
                    raise StorageError(f"No document '{self.document_name}' in {self.database_url}")
                return document.content
        except SQLAlchemyError as e:
            raise StorageError(f"Could not read {self.database_url}: {e}") from e

    def write_text(self, text: str) -> None:
        try:
            with self.session_factory() as session:
                document = self._get(session)
                if document is None:
                    session.add(Document(name=self.document_name, content=text))
                else:
                    document.content = text
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Could not write {self.database_url}: {e}") from e
