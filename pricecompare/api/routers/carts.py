# pricecompare/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Response

from pricecompare.api.deps import get_cart_service
from pricecompare.domain.schemas import (
    CartOut,
    CheckoutIn,
    Comparison,
    ItemIn,
    Order,
    QuantityIn,
)
from pricecompare.repos.document_repo import StorageError
from pricecompare.services.cart_service import CartService

router = APIRouter(prefix="/carts", tags=["carts"])


def cart_view(svc: CartService, session_id: str) -> CartOut:
    return CartOut(
        session_id=session_id,
        items=svc.get_cart(session_id),
        comparison=svc.get_quotes(session_id),
    )


@router.get("/{session_id}", response_model=CartOut)
def get_cart(session_id: str, svc: CartService = Depends(get_cart_service)):
    return cart_view(svc, session_id)


@router.get("/{session_id}/quotes", response_model=Comparison)
def get_quotes(session_id: str, svc: CartService = Depends(get_cart_service)):
    return svc.get_quotes(session_id)


@router.post("/{session_id}/items", response_model=CartOut)
def add_item(
    session_id: str,
    payload: ItemIn,
    svc: CartService = Depends(get_cart_service),
):
    try:
        svc.add_product(session_id, payload.product_id, payload.quantity)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return cart_view(svc, session_id)


@router.put("/{session_id}/items/{product_id}", response_model=CartOut)
def update_item(
    session_id: str,
    product_id: str,
    payload: QuantityIn,
    svc: CartService = Depends(get_cart_service),
):
    try:
        svc.update_quantity(session_id, product_id, payload.quantity)
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return cart_view(svc, session_id)


@router.delete("/{session_id}/items/{product_id}", response_model=CartOut)
def remove_item(
    session_id: str,
    product_id: str,
    svc: CartService = Depends(get_cart_service),
):
    try:
        svc.remove_product(session_id, product_id)
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return cart_view(svc, session_id)


@router.delete("/{session_id}", response_model=CartOut)
def clear_cart(session_id: str, svc: CartService = Depends(get_cart_service)):
    try:
        svc.clear_cart(session_id)
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return cart_view(svc, session_id)


@router.post(
    "/{session_id}/checkout",
    response_model=Order,
    status_code=201,
    responses={204: {"description": "Cart is empty, nothing to order"}},
)
def checkout(
    session_id: str,
    payload: CheckoutIn,
    svc: CartService = Depends(get_cart_service),
):
    """
    Places an order from the cart and clears it.
    An empty cart is not an error: 204 and nothing changes.
    """
    try:
        order = svc.checkout(session_id, payload)
    except StorageError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if order is None:
        return Response(status_code=204)
    return order
