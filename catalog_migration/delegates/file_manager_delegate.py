# catalog_migration/delegates/file_manager_delegate.py
import json
import re
import shutil
import time
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple
from ..models import CategoryRecord, ProductRecord

logger = logging.getLogger(__name__)

class FileManagerDelegate:
    """The migration's data store: categories, products, images and raw API samples on disk."""
    def __init__(self, base_path: Path):
        self.base_path = base_path
        self.categories_path = base_path / "categories"
        self.products_path = base_path / "products"
        self.images_path = base_path / "images"
        self.samples_path = base_path / "wc_samples"

        for p in [self.categories_path, self.products_path, self.images_path, self.samples_path]:
            p.mkdir(parents=True, exist_ok=True)
        logger.info("File manager initialized. Data will be stored in subdirectories of: %s", base_path)

    @staticmethod
    def _safe_name(name: str) -> str:
        return re.sub(r'[^a-zA-Z0-9_-]', '_', name)

    def _write_json(self, file_path: Path, data) -> Path:
        try:
            with file_path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            return file_path
        except TypeError as te:
            logger.error("TypeError during JSON dump to %s (unserializable object?): %s", file_path, te)
            raise
        except Exception as e:
            logger.error("Failed to write %s: %s", file_path, e, exc_info=True)
            raise

    def _read_records(self, directory: Path) -> Iterator[Dict]:
        for file_path in sorted(directory.glob("*.json")):
            try:
                with file_path.open("r", encoding="utf-8") as f:
                    yield json.load(f)
            except json.JSONDecodeError as e:
                logger.error("Skipping unreadable record %s: %s", file_path, e)

    # --- Categories ---

    def load_categories(self) -> List[Dict]:
        return list(self._read_records(self.categories_path))

    def load_category_slugs(self) -> Set[str]:
        return {c["slug"] for c in self.load_categories() if c.get("slug")}

    def find_category_by_name(self, *names: str) -> Optional[Dict]:
        """First stored category whose name is any of `names`."""
        wanted = set(names)
        for category in self.load_categories():
            if category.get("name") in wanted:
                return category
        return None

    def save_category(self, category: CategoryRecord) -> Path:
        file_path = self.categories_path / f"{self._safe_name(category.slug)}.json"
        self._write_json(file_path, category.dict())
        logger.debug("Saved category %s to %s", category.name, file_path.name)
        return file_path

    # --- Products ---

    def load_products(self) -> List[Dict]:
        return list(self._read_records(self.products_path))

    def load_existing_slugs_and_skus(self) -> Tuple[Set[str], Set[str]]:
        """Slugs and SKUs already used by stored products, so re-runs don't duplicate them."""
        products = self.load_products()
        slugs = {p["slug"] for p in products if p.get("slug")}
        skus = {p["sku"] for p in products if p.get("sku")}
        return slugs, skus

    def save_product(self, product: ProductRecord) -> Path:
        """Saves the final, structured JSON output for a single product."""
        file_path = self.products_path / f"{self._safe_name(product.slug)}.json"
        self._write_json(file_path, product.dict())
        logger.debug("Saved product %s to %s", product.sku, file_path.name)
        return file_path

    # --- Images ---

    def save_image(self, product_id: str, index: int, content: bytes, ext: str) -> str:
        """Stores one product image and returns the location the storefront should use as its URL."""
        image_dir = self.images_path / self._safe_name(product_id)
        image_dir.mkdir(parents=True, exist_ok=True)
        file_path = image_dir / f"{index}-{int(time.time() * 1000)}.{ext}"
        try:
            file_path.write_bytes(content)
        except OSError as e:
            logger.error("Failed to save image %d for product %s to %s: %s", index, product_id, file_path, e)
            raise
        return file_path.relative_to(self.base_path).as_posix()

    def discard_images(self, product_id: str) -> None:
        """Removes every stored image of a product that never made it into the store."""
        image_dir = self.images_path / self._safe_name(product_id)
        if image_dir.exists():
            shutil.rmtree(image_dir)
            logger.info("Discarded images for product %s", product_id)

    # --- Raw API samples ---

    def save_sample(self, wc_product: Dict) -> Path:
        """Saves a raw WooCommerce product exactly as the API returned it."""
        prefix = wc_product.get("sku") or wc_product.get("id")
        slug = (wc_product.get("slug") or "")[:30]
        file_path = self.samples_path / f"{self._safe_name(str(prefix))}-{self._safe_name(slug)}.json"
        self._write_json(file_path, wc_product)
        logger.debug("Saved sample: %s", file_path.name)
        return file_path

    def iter_samples(self) -> Iterator[Dict]:
        return self._read_records(self.samples_path)
