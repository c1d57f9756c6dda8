from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from storefront.data.models.cart import CartModel, CART_ACTIVE
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.results import CartResult, FailureKind
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.retry import StaleCartError, cart_write_retry
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CENTS = Decimal("0.01")


def compute_total(items: Iterable[CartItemModel]) -> Decimal:
    return sum((i.unit_price * i.quantity for i in items), Decimal("0.00"))


class CartService:
    """
    Cart use cases for the caller's single active cart.

    query: get_or_create_active_cart
    commands: add_item, update_item, delete_item

    Commands return a CartResult instead of raising for business outcomes.
    Each command is a read-modify-write closed by a conditional write on the
    cart version; a lost race is retried from a fresh read.
    """

    def __init__(self, db: Session, catalog=None, attempts: int | None = None):
        self.repo = CartRepo(db)
        # anything with get_product(product_id)
        self.catalog = catalog or ProductRepo(db)
        self.attempts = attempts

    # query
    def get_or_create_active_cart(self, user_id: str) -> CartModel:
        existing = self.repo.get_active_cart_by_user(user_id)
        if existing:
            return existing

        try:
            created = self.repo.create_cart(
                CartModel(
                    user_id=user_id,
                    status=CART_ACTIVE,
                    total_amount=Decimal("0.00"),
                    version=1,
                )
            )
        except IntegrityError:
            # a concurrent request created the active cart first
            self.repo.rollback()
            existing = self.repo.get_active_cart_by_user(user_id)
            if not existing:
                raise
            logger.info(f"Active cart for user {user_id} created concurrently, reusing it")
            return existing

        logger.info(f"Created cart {created.id} for user {user_id}")
        return created

    # commands
    def add_item(self, user_id: str, product_id: str, quantity: int) -> CartResult:
        if quantity < 1:
            return CartResult.fail(FailureKind.INVALID_QUANTITY, "Quantity must be at least 1")
        return self._run(self._add_item, "Failed to add item to cart", user_id, product_id, quantity)

    def update_item(self, user_id: str, product_id: str, quantity: int) -> CartResult:
        if quantity < 1:
            return CartResult.fail(FailureKind.INVALID_QUANTITY, "Quantity must be at least 1")
        return self._run(self._update_item, "Failed to update cart", user_id, product_id, quantity)

    def delete_item(self, user_id: str, product_id: str) -> CartResult:
        return self._run(self._delete_item, "Failed to delete item from cart", user_id, product_id)

    def _run(self, command, failure_message: str, *args) -> CartResult:
        try:
            return cart_write_retry(self.attempts)(command)(*args)
        except StaleCartError:
            logger.warning(f"Giving up on {command.__name__} for user {args[0]}: cart kept changing")
            return CartResult.fail(
                FailureKind.CART_CONFLICT,
                "Cart was modified by another request, try again",
            )
        except SQLAlchemyError as e:
            self.repo.rollback()
            return CartResult.fail(FailureKind.STORAGE_FAILURE, failure_message, error=e)

    def _add_item(self, user_id: str, product_id: str, quantity: int) -> CartResult:
        cart = self.get_or_create_active_cart(user_id)

        if _find_item(cart, product_id):
            return CartResult.fail(FailureKind.DUPLICATE_ITEM, "Item already exists in cart")

        product = self.catalog.get_product(product_id)
        if not product:
            return CartResult.fail(FailureKind.PRODUCT_NOT_FOUND, "Product not found")

        if product.stock < quantity:
            return CartResult.fail(FailureKind.INSUFFICIENT_STOCK, "Low stock for this product")

        self.repo.add_cart_item(
            cart,
            CartItemModel(
                product_id=product.id,
                title=product.title,
                unit_price=Decimal(str(product.price)).quantize(CENTS),
                quantity=quantity,
            ),
        )

        try:
            self._save(cart, compute_total(cart.items))
        except IntegrityError:
            # same product added by a concurrent request; the retry re-reads and reports it
            self.repo.rollback()
            raise StaleCartError(cart.id)

        logger.info(f"Added product {product_id} x{quantity} to cart {cart.id}")
        return CartResult.success(self.repo.refresh(cart))

    def _update_item(self, user_id: str, product_id: str, quantity: int) -> CartResult:
        cart = self.get_or_create_active_cart(user_id)

        item = _find_item(cart, product_id)
        if not item:
            return CartResult.fail(FailureKind.ITEM_NOT_IN_CART, "Item does not exist in the cart")

        product = self.catalog.get_product(product_id)
        if not product:
            return CartResult.fail(FailureKind.PRODUCT_NOT_FOUND, "Product not found")

        if product.stock < quantity:
            return CartResult.fail(FailureKind.INSUFFICIENT_STOCK, "Low stock for this product")

        # unit_price stays at the add-time price
        item.quantity = quantity
        others = [i for i in cart.items if i is not item]
        total = compute_total(others) + item.unit_price * item.quantity

        self._save(cart, total)

        logger.info(f"Set product {product_id} quantity to {quantity} in cart {cart.id}")
        return CartResult.success(self.repo.refresh(cart))

    def _delete_item(self, user_id: str, product_id: str) -> CartResult:
        cart = self.get_or_create_active_cart(user_id)

        item = _find_item(cart, product_id)
        if not item:
            return CartResult.fail(FailureKind.ITEM_NOT_IN_CART, "Item does not exist in the cart")

        self.repo.delete_cart_item(cart, item)
        self._save(cart, compute_total(cart.items))

        logger.info(f"Removed product {product_id} from cart {cart.id}")
        return CartResult.success(self.repo.refresh(cart))

    def _save(self, cart: CartModel, total: Decimal) -> None:
        cart_id = cart.id
        old_version = cart.version
        try:
            rowcount = self.repo.update_cart_version(
                cart_id=cart_id,
                old_version=old_version,
                new_data={
                    "version": old_version + 1,
                    "total_amount": total,
                    "updated_at": datetime.now(timezone.utc),
                },
            )
        except StaleDataError:
            # an item row we changed was already deleted by a concurrent request
            self.repo.rollback()
            logger.warning(f"Item rows of cart {cart_id} changed underneath us")
            raise StaleCartError(cart_id)

        # UPDATE ... WHERE id = :id AND version = :old_version
        if rowcount == 0:
            self.repo.rollback()
            logger.warning(f"Version conflict on cart {cart.id} (expected version {old_version})")
            raise StaleCartError(cart.id)

        self.repo.commit()


def _find_item(cart: CartModel, product_id: str) -> CartItemModel | None:
    return next((i for i in cart.items if i.product_id == product_id), None)
