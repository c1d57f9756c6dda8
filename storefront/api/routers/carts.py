# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user_id
from storefront.data.database import get_db
from storefront.domain.results import CartResult, FailureKind
from storefront.domain.schemas import ItemIn, CartOut
from storefront.services.cart_service import CartService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/cart", tags=["cart"])

STATUS_CODES = {
    FailureKind.DUPLICATE_ITEM: 400,
    FailureKind.PRODUCT_NOT_FOUND: 404,
    FailureKind.INSUFFICIENT_STOCK: 400,
    FailureKind.ITEM_NOT_IN_CART: 400,
    FailureKind.INVALID_QUANTITY: 400,
    FailureKind.CART_CONFLICT: 409,
    FailureKind.STORAGE_FAILURE: 500,
}


def get_service(db: Session = Depends(get_db)):
    return CartService(db)


def unwrap(result: CartResult, user_id: str):
    if result.ok:
        return result.value

    if result.failure is FailureKind.STORAGE_FAILURE:
        logger.error(f"Cart storage failure for user {user_id}: {result.error!r}")

    raise HTTPException(
        status_code=STATUS_CODES[result.failure],
        detail={"failure": result.failure.value, "message": result.message},
    )


@router.get("", response_model=CartOut)
def get_cart(
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    try:
        return svc.get_or_create_active_cart(user_id)
    except SQLAlchemyError:
        logger.exception(f"Failed to fetch cart for user {user_id}")
        raise HTTPException(status_code=500, detail="An error occurred while fetching the cart")


@router.post("/items", response_model=CartOut)
def add_item(
    payload: ItemIn,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    return unwrap(svc.add_item(user_id, payload.product_id, payload.quantity), user_id)


@router.put("/items", response_model=CartOut)
def update_item(
    payload: ItemIn,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    return unwrap(svc.update_item(user_id, payload.product_id, payload.quantity), user_id)


@router.delete("/items/{product_id}", response_model=CartOut)
def delete_item(
    product_id: str,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_service),
):
    return unwrap(svc.delete_item(user_id, product_id), user_id)
