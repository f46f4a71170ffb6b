# pricecompare/repos/document_repo.py
from typing import Any, List

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pricecompare.data.models.document import DocumentModel
from pricecompare.utils.settings import STORAGE_SCHEMA_VERSION
from pricecompare.utils.logging import get_logger

logger = get_logger(__name__)


class DocumentRepo:
    """
    Key -> JSON list storage on top of the documents table.

    Reads never fail: a missing, corrupt or foreign-version document
    comes back as an empty list. Writes that fail are rolled back and
    reported through the return value.
    """

    def __init__(self, db: Session, adapter: TypeAdapter, schema_version: int = STORAGE_SCHEMA_VERSION):
        self.db = db
        self.adapter = adapter
        self.schema_version = schema_version

    def load(self, key: str) -> List[Any]:
        try:
            doc = self.db.get(DocumentModel, key)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read {key} from storage: {e}")
            self.db.rollback()
            return []

        if doc is None:
            return []

        if doc.schema_version != self.schema_version:
            logger.warning(
                f"Ignoring {key}: stored schema version {doc.schema_version}, "
                f"expected {self.schema_version}"
            )
            return []

        try:
            return self.adapter.validate_json(doc.payload)
        except ValidationError as e:
            logger.error(f"Corrupt document {key}, falling back to empty: {e}")
            return []

    def save(self, key: str, items: List[Any]) -> bool:
        payload = self.adapter.dump_json(items).decode("utf-8")
        try:
            doc = self.db.get(DocumentModel, key)
            if doc is None:
                self.db.add(DocumentModel(key=key, schema_version=self.schema_version, payload=payload))
            else:
                doc.schema_version = self.schema_version
                doc.payload = payload
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to persist {key}: {e}")
            self.db.rollback()
            return False
        return True


class StorageError(RuntimeError):
    """A write that callers must not report as done."""
