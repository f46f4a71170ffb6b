# pricecompare/repos/cart_repo.py
from typing import List

from pydantic import TypeAdapter
from sqlalchemy.orm import Session

from pricecompare.domain.schemas import CartEntry
from pricecompare.repos.document_repo import DocumentRepo

_CART = TypeAdapter(List[CartEntry])


def cart_key(session_id: str) -> str:
    return f"cart:{session_id}"


class CartRepo:
    def __init__(self, db: Session):
        self.docs = DocumentRepo(db, _CART)

    def get_cart(self, session_id: str) -> List[CartEntry]:
        return self.docs.load(cart_key(session_id))

    def save_cart(self, session_id: str, items: List[CartEntry]) -> bool:
        return self.docs.save(cart_key(session_id), items)

    def clear_cart(self, session_id: str) -> bool:
        return self.docs.save(cart_key(session_id), [])
