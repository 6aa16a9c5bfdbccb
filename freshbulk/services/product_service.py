# freshbulk/services/product_service.py
from typing import List

from freshbulk.domain.schemas import ProductCreate, ProductUpdate, ProductOut
from freshbulk.repos.storage import Storage
from freshbulk.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def list_products(self) -> List[ProductOut]:
        return self.storage.get_all_products()

    def get_product(self, product_id: int) -> ProductOut | None:
        return self.storage.get_product(product_id)

    def create_product(self, payload: ProductCreate) -> ProductOut:
        product = self.storage.create_product(payload)
        logger.info(f"Utworzono produkt {product.id} ({product.name})")
        return product

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductOut | None:
        product = self.storage.update_product(product_id, payload)
        if product:
            logger.info(f"Zaktualizowano produkt {product_id}")
        return product

    def delete_product(self, product_id: int) -> bool:
        # zamowienia trzymaja snapshot, wiec usuwamy bez sprawdzania referencji
        deleted = self.storage.delete_product(product_id)
        if deleted:
            logger.info(f"Usunieto produkt {product_id}")
        return deleted
