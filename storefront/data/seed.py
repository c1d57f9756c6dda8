# storefront/data/seed.py
from storefront.data.database import SessionLocal
from storefront.services.product_service import ProductService


def seed(session_factory=SessionLocal) -> int:
    # only seeds an empty catalog
    db = session_factory()
    try:
        return ProductService(db).seed_initial_products()
    finally:
        db.close()
