# pricecompare/catalog_service/main.py
from fastapi import FastAPI, HTTPException

from pricecompare.services.catalog_service import load_catalog_file
from pricecompare.utils.settings import CATALOG_PATH

app = FastAPI(title="Catalog Service (dev mock)")

CATALOG = load_catalog_file(CATALOG_PATH)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/catalog")
def get_catalog():
    return CATALOG


@app.get("/catalog/products/{product_id}")
def get_product(product_id: str):
    product = CATALOG.product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
