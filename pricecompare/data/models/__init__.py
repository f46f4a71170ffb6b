# import all models so SQLAlchemy registers them in Base.metadata

from pricecompare.data.models.document import DocumentModel

__all__ = ["DocumentModel"]
