from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import ProductOut
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/product", tags=["product"])


def get_service(db: Session = Depends(get_db)):
    return ProductService(db)


@router.get("", response_model=List[ProductOut])
def list_products(
    search: str | None = Query(default=None, description="Case-insensitive title filter"),
    service: ProductService = Depends(get_service),
):
    return service.list_products(search)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, service: ProductService = Depends(get_service)):
    product = service.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
