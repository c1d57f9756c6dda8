# storefront/repos/cart_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel, CART_ACTIVE
from storefront.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_active_cart_by_user(self, user_id: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(
                CartModel.user_id == user_id,
                CartModel.status == CART_ACTIVE,
            )
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def add_cart_item(self, cart: CartModel, item: CartItemModel) -> CartItemModel:
        item.position = max((i.position for i in cart.items), default=-1) + 1
        cart.items.append(item)
        return item

    def delete_cart_item(self, cart: CartModel, item: CartItemModel) -> None:
        cart.items.remove(item)

    def update_cart_version(self, cart_id: str, old_version: int, new_data: dict) -> int:
        # pending item changes go out in the same transaction as the version bump
        self.db.flush()
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == old_version)
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def refresh(self, cart: CartModel) -> CartModel:
        self.db.refresh(cart)
        return cart
