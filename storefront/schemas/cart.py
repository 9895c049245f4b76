"""
storefront/schemas/cart.py - Pydantic model for a cart line held by the storefront core.
"""
from pydantic import Field

from storefront.schemas.common import CamelModel


class CartEntry(CamelModel):
    product_id: str = Field(..., description="ID of the product (unique within a cart)")
    name: str = Field(..., description="Name of the product")
    price: float = Field(..., description="Unit price at the time of adding to cart")
    image: str = Field("", description="Image reference")
    brand: str = Field("", description="Brand name")
    quantity: int = Field(1, description="Quantity of the product in the cart")

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity
