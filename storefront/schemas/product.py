"""
# `storefront/schemas/product.py`: Product schemas

## Input
### `ProductCreate`
| Field         | Type          | Required | Notes |
|---------------|---------------|----------|-------|
| name          | `str`         | ✔        | |
| brand         | `str`         | ✔        | drives the brand grouping on the storefront |
| price         | `float`       | ✔        | ≥ 0 |
| originalPrice | `float`/`null`| ✖        | struck-through price |
| image         | `str`         | ✔        | image URL |
| category      | `str`         | ✖        | default `shoes` |
| badge         | `str`         | ✖        | default `""` |
| description   | `str`         | ✖        | |
| sizes, colors | `list[str]`   | ✖        | |
| inStock       | `bool`        | ✖        | default `true` |
| featured      | `bool`        | ✖        | also listed under "new arrivals" |

### `ProductUpdate`
Same fields, all optional; only the provided ones are written.

## Output
### `ProductOut`
`ProductCreate` + `id` and `createdAt`.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from storefront.schemas.common import CamelModel, Envelope


class ProductBase(CamelModel):
    """Common product fields for creation/output."""
    name: str = Field(..., min_length=1, description="Product name")
    brand: str = Field(..., min_length=1, description="Brand name")
    price: float = Field(..., ge=0, description="Selling price")
    original_price: Optional[float] = Field(None, description="Price before discount")
    image: str = Field(..., description="Image URL")
    category: str = Field("shoes", description="Category")
    badge: str = Field("", description="Badge text (NEW, HOT, ...)")
    description: str = Field("", description="Detailed description")
    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    in_stock: bool = Field(True, description="Purchasable")
    featured: bool = Field(False, description="Shown under new arrivals too")


class ProductCreate(ProductBase):
    pass


class ProductUpdate(CamelModel):
    """Schema for updating product fields (admin)."""
    name: Optional[str] = None
    brand: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = None
    image: Optional[str] = None
    category: Optional[str] = None
    badge: Optional[str] = None
    description: Optional[str] = None
    sizes: Optional[List[str]] = None
    colors: Optional[List[str]] = None
    in_stock: Optional[bool] = None
    featured: Optional[bool] = None


class ProductOut(ProductBase):
    id: str
    created_at: Optional[datetime] = None


class ProductListResponse(Envelope):
    products: List[ProductOut] = Field(default_factory=list)


class ProductResponse(Envelope):
    product: ProductOut
