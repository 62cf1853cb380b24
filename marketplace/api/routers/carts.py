#marketplace/api/routers/carts.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from marketplace.api.deps import get_current_identity
from marketplace.data.database import get_db
from marketplace.domain.schemas import CartAddIn, CartOut, Identity, MessageOut
from marketplace.services.cart_service import CREATED, CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db=db)


@router.get("", response_model=CartOut)
def get_cart(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.get_cart(identity.id)


@router.post("/add", response_model=MessageOut)
def add_to_cart(
    payload: CartAddIn,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    outcome = svc.add_item(identity.id, payload.product_id, payload.quantity)

    if outcome == CREATED:
        response.status_code = status.HTTP_201_CREATED
        return {"message": "Item added to cart"}
    return {"message": "Cart item quantity updated"}


@router.delete("/remove/{cart_item_id}", response_model=MessageOut)
def remove_from_cart(
    cart_item_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    svc.remove_item(identity.id, cart_item_id)
    return {"message": "Item removed from cart"}
