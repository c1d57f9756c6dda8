# storefront/repos/product_repo.py
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(self) -> list[ProductModel]:
        return list(self.db.execute(select(ProductModel).order_by(ProductModel.title)).scalars())

    def search_products(self, term: str) -> list[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .where(ProductModel.title.icontains(term, autoescape=True))
                .order_by(ProductModel.title)
            ).scalars()
        )

    def count_products(self) -> int:
        return self.db.execute(select(func.count()).select_from(ProductModel)).scalar_one()

    def add_products(self, products: list[ProductModel]) -> list[ProductModel]:
        self.db.add_all(products)
        self.db.commit()
        return products
