"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from chairup.catalogue.product import Product
from chairup.domain import chairup
from chairup.exceptions import NotFound


@chairup.repository(part_of=Product)
class ProductRepository:
    """Catalogue lookups on top of the standard CRUD operations."""

    def get_active(self, product_id) -> Product:
        """Fetch a product that is still listed, or raise ``NotFound`` naming it."""
        try:
            product = self.get(str(product_id))
        except ObjectNotFoundError:
            raise NotFound({"product_id": [f"Product not found: {product_id}"]}) from None
        if not product.is_active:
            raise NotFound({"product_id": [f"Product not found: {product_id}"]})
        return product

    def listed(self, category: str | None = None) -> list[Product]:
        """Active products, newest first."""
        filters = {"is_active": True}
        if category:
            filters["category"] = category
        products = self._dao.query.filter(**filters).all().items
        return sorted(products, key=lambda p: p.created_at, reverse=True)

    def categories(self) -> list[str]:
        return sorted({p.category for p in self.listed() if p.category})
