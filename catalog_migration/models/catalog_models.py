# catalog_migration/models/catalog_models.py

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

@dataclass
class CategoryRecord:
    """A storefront category created from a WooCommerce category."""
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    image: Optional[str] = None
    position: int = 0
    featured: bool = False
    source_id: Optional[int] = None

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProductImageRecord:
    product_id: str
    url: str
    alt: Optional[str] = None
    position: int = 0

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProductRecord:
    """
    The storefront row for one migrated product. Spec fields come from the
    HTML description, everything else from the WooCommerce product itself.
    """
    id: str
    name: str
    slug: str
    sku: str
    description: Optional[str]
    price: float
    sale_price: Optional[float] = None
    category_id: Optional[str] = None
    category: Optional[str] = None
    stock_quantity: int = 0
    track_inventory: bool = False

    # Common specs
    model_number: Optional[str] = None
    size: Optional[str] = None
    weight: Optional[float] = None
    warranty: Optional[str] = None
    # Inflatable specs
    pieces: Optional[int] = None
    blowers: Optional[int] = None
    operators: Optional[int] = None
    riders: Optional[str] = None
    indoor: Optional[bool] = None
    outdoor: Optional[bool] = None
    # Motor/Blower specs
    power: Optional[str] = None
    voltage: Optional[str] = None
    frequency: Optional[str] = None
    phase: Optional[str] = None
    rpm: Optional[int] = None
    amps: Optional[float] = None

    # Legacy fields kept for older storefront pages
    age_range: Optional[str] = None
    dimensions: Optional[str] = None

    status: str = "ACTIVE"
    badge: Optional[str] = None
    featured: bool = False
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    published_at: Optional[datetime] = None
    source_id: Optional[int] = None
    images: List[ProductImageRecord] = field(default_factory=list)

    def dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.published_at is not None:
            data["published_at"] = self.published_at.isoformat()
        return data
