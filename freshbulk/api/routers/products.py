# freshbulk/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from freshbulk.api.deps import get_storage, require_admin
from freshbulk.domain.schemas import ProductCreate, ProductUpdate, ProductOut
from freshbulk.repos.storage import Storage
from freshbulk.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(storage: Storage = Depends(get_storage)) -> ProductService:
    return ProductService(storage)


@router.get("/", response_model=List[ProductOut])
def list_products(svc: ProductService = Depends(get_service)):
    return svc.list_products()


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, svc: ProductService = Depends(get_service)):
    product = svc.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Produkt nie znaleziony")
    return product


@router.post("/", response_model=ProductOut, status_code=201, dependencies=[Depends(require_admin)])
def create_product(payload: ProductCreate, svc: ProductService = Depends(get_service)):
    return svc.create_product(payload)


@router.put("/{product_id}", response_model=ProductOut, dependencies=[Depends(require_admin)])
def update_product(
    product_id: int,
    payload: ProductUpdate,
    svc: ProductService = Depends(get_service),
):
    product = svc.update_product(product_id, payload)
    if not product:
        raise HTTPException(status_code=404, detail="Produkt nie znaleziony")
    return product


@router.delete("/{product_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_product(product_id: int, svc: ProductService = Depends(get_service)):
    if not svc.delete_product(product_id):
        raise HTTPException(status_code=404, detail="Produkt nie znaleziony")
    return Response(status_code=204)
