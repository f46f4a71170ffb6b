# pricecompare/api/routers/orders.py
from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from pricecompare.api.deps import get_order_service
from pricecompare.domain.schemas import Order, OrderStats, StatusIn
from pricecompare.repos.document_repo import StorageError
from pricecompare.services.order_service import OrderService, order_stats

router = APIRouter(prefix="/orders", tags=["orders"])

Role = Literal["customer", "admin"]


def visible_orders(svc: OrderService, customer: str | None, role: Role) -> List[Order]:
    # admins see everything, customers only their own
    if role == "admin":
        return svc.list_orders()
    return svc.list_orders(customer=customer or "Guest")


@router.get("/", response_model=List[Order])
def list_orders(
    customer: str | None = Query(None),
    role: Role = Query("customer"),
    svc: OrderService = Depends(get_order_service),
):
    return visible_orders(svc, customer, role)


@router.get("/stats", response_model=OrderStats)
def get_stats(
    customer: str | None = Query(None),
    role: Role = Query("customer"),
    svc: OrderService = Depends(get_order_service),
):
    return order_stats(visible_orders(svc, customer, role))


@router.get("/{order_id}", response_model=Order)
def get_order(order_id: str, svc: OrderService = Depends(get_order_service)):
    order = svc.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.patch("/{order_id}/status", response_model=Order)
def update_status(
    order_id: str,
    payload: StatusIn,
    role: Role = Query("customer"),
    svc: OrderService = Depends(get_order_service),
):
    """
    Moves an order between Pending, Scanned and Fulfilled. Admin only.
    """
    if role != "admin":
        raise HTTPException(status_code=403, detail="Only administrators can change order status")
    try:
        order = svc.update_order_status(order_id, payload.status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.delete("/{order_id}", status_code=204)
def delete_order(
    order_id: str,
    customer: str | None = Query(None),
    role: Role = Query("customer"),
    svc: OrderService = Depends(get_order_service),
):
    try:
        deleted = svc.delete_order(order_id, customer=customer, is_admin=role == "admin")
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Order not found")
    return Response(status_code=204)
