# storefront/services/product_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

INITIAL_PRODUCTS = [
    {
        "title": "Dell laptop",
        "image": "https://i.dell.com/is/image/DellContent/content/dam/ss2/product-images/dell-client-products/notebooks/latitude-notebooks/13-3320/media-gallery/peripherals_laptop_latitude_3320_gallery_1.psd",
        "price": Decimal("10.00"),
        "stock": 100,
    },
    {"title": "Wireless mouse", "image": None, "price": Decimal("4.50"), "stock": 250},
    {"title": "USB-C dock", "image": None, "price": Decimal("39.90"), "stock": 20},
]


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.repo.get_product(product_id)

    def list_products(self, search: str | None = None) -> list[ProductModel]:
        """All products, or those whose title contains ``search`` (case-insensitive)."""
        if not search or not search.strip():
            return self.repo.list_products()
        return self.repo.search_products(search.strip())

    def seed_initial_products(self) -> int:
        if self.repo.count_products() > 0:
            return 0
        products = self.repo.add_products([ProductModel(**p) for p in INITIAL_PRODUCTS])
        logger.info(f"Seeded {len(products)} products")
        return len(products)
