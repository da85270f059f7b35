from __future__ import annotations

import logging
from typing import List

from ...domain.catalog.entities import (
    NewProduct,
    Product,
    parse_product,
    parse_products,
)
from ...domain.errors import UnexpectedStatusError
from ..http.http_client import HttpClient

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/products"


class CatalogClient:
    """Client bound to the product catalog contract.

    Response bodies are validated into ``Product`` entities here so
    callers never inspect untyped JSON.
    """

    def __init__(self, http: HttpClient) -> None:
        # http is expected to be initialized against the catalog base URL
        self._http = http

    def list_products(self) -> List[Product]:
        resp = self._http.get(PRODUCTS_PATH)
        return parse_products(resp.content)

    def get_product(self, product_id: int) -> Product:
        resp = self._http.get(f"{PRODUCTS_PATH}/{product_id}")
        return parse_product(resp.content)

    def create_product(self, product: NewProduct) -> Product:
        """Submit ``product`` and validate the echoed entity.

        The catalog answers 201 on creation; anything else fails the caller.
        """
        resp = self._http.post(PRODUCTS_PATH, product)
        if resp.status_code != 201:
            raise UnexpectedStatusError(resp, expected=201)
        created = parse_product(resp.content)
        logger.info("Created product id=%s title=%r", created.id, created.title)
        return created
