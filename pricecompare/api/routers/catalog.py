# pricecompare/api/routers/catalog.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from pricecompare.domain.schemas import Catalog, Product, Store
from pricecompare.services.catalog_service import get_catalog

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/stores", response_model=List[Store])
def list_stores(catalog: Catalog = Depends(get_catalog)):
    return catalog.stores


@router.get("/products", response_model=List[Product])
def list_products(catalog: Catalog = Depends(get_catalog)):
    return catalog.products


@router.get("/products/{product_id}", response_model=Product)
def get_product(product_id: str, catalog: Catalog = Depends(get_catalog)):
    product = catalog.product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
