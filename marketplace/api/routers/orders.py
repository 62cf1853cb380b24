# marketplace/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketplace.api.deps import get_current_identity, get_lock_service
from marketplace.data.database import get_db
from marketplace.domain.schemas import CheckoutIn, CheckoutOut, Identity, OrderOut
from marketplace.services.lock_service import LockService
from marketplace.services.order_service import OrderService

router = APIRouter(tags=["orders"])


def get_service(db: Session, lock_service: LockService | None = None):
    return OrderService(db, lock_service=lock_service)


@router.post("/order/checkout", response_model=CheckoutOut)
def checkout(
    payload: CheckoutIn,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Turns the caller's cart into an order and empties the cart.
    The notification goes out asynchronously.
    """
    svc = get_service(db, lock_service)
    return svc.checkout(identity.id, payload.address, payload.payment_method)


@router.get("/order/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.get_order(identity, order_id)


@router.get("/orders", response_model=List[OrderOut])
def list_orders(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.list_orders(identity.id)
