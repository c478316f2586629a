# catalog_migration/pipeline/steps.py
import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional, Set
from urllib.parse import urlparse
from rich.pretty import pprint

from .. import config
from ..delegates import WooCommerceDelegate, DownloaderDelegate, FileManagerDelegate
from ..models import CategoryRecord, ProductRecord, ProductImageRecord
from ..parsing import parse_specs
from ..utils import strip_html, decode_name, generate_slug, generate_sku

logger = logging.getLogger(__name__)


@dataclass
class MigrationSummary:
    migrated: int = 0
    failed: int = 0
    skipped: int = 0


def _to_float(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _meta_value(wc_product: Dict, key: str) -> Optional[str]:
    for meta in wc_product.get("meta_data") or []:
        if meta.get("key") == key:
            value = meta.get("value")
            return value if isinstance(value, str) and value else None
    return None


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.warning("Unparseable date_created: %r", value)
        return None


def image_extension(url: str) -> str:
    """File extension taken from the image URL, 'jpg' when there isn't one."""
    suffix = PurePosixPath(urlparse(url).path).suffix
    return suffix.lstrip(".").lower() or "jpg"


def build_product_record(wc_product: Dict, category_map: Dict[int, str],
                         existing_slugs: Set[str], existing_skus: Set[str]) -> ProductRecord:
    """Maps one WooCommerce product onto a storefront ProductRecord (images not included)."""
    short_description = wc_product.get("short_description") or ""
    long_description = wc_product.get("description") or ""
    specs = parse_specs(short_description or long_description)

    slug = generate_slug(wc_product["name"], existing_slugs)
    sku = generate_sku(wc_product.get("sku"), existing_skus)

    categories = wc_product.get("categories") or []
    primary_category = categories[0] if categories else None
    category_id = category_map.get(primary_category["id"]) if primary_category else None

    badge = None
    if wc_product.get("on_sale"):
        badge = "SALE"
    elif wc_product.get("featured"):
        badge = "POPULAR"

    stock_quantity = wc_product.get("stock_quantity")
    if stock_quantity is None:
        stock_quantity = config.DEFAULT_IN_STOCK_QUANTITY if wc_product.get("stock_status") == "instock" else 0

    # The table's unit weight is the real product weight; WooCommerce's own weight is for shipping.
    # A shipping weight of "0" is kept as 0.0.
    shipping_weight = wc_product.get("weight")
    weight = specs.weight or (_to_float(shipping_weight) if shipping_weight else None)

    dims = wc_product.get("dimensions") or {}
    dimensions = None
    if dims.get("length") and dims.get("width") and dims.get("height"):
        dimensions = f"{dims['length']}x{dims['width']}x{dims['height']}"

    return ProductRecord(
        id=uuid.uuid4().hex,
        name=wc_product["name"],
        slug=slug,
        sku=sku,
        description=specs.clean_description or strip_html(long_description or short_description) or None,
        price=_to_float(wc_product.get("regular_price")) or 0.0,
        sale_price=_to_float(wc_product.get("sale_price")) if wc_product.get("sale_price") else None,
        category_id=category_id,
        category=decode_name(primary_category["name"]) if primary_category else None,
        stock_quantity=stock_quantity,
        track_inventory=wc_product.get("stock_quantity") is not None,
        model_number=specs.model_number,
        size=specs.size,
        weight=weight,
        warranty=specs.warranty,
        pieces=specs.pieces or None,
        blowers=specs.blowers or None,
        operators=specs.operators or None,
        riders=specs.riders,
        indoor=specs.indoor,
        outdoor=specs.outdoor,
        power=specs.power,
        voltage=specs.voltage,
        frequency=specs.frequency,
        phase=specs.phase,
        rpm=specs.rpm or None,
        amps=specs.amps or None,
        age_range=f"{specs.riders} riders" if specs.riders else None,
        dimensions=dimensions,
        status="ARCHIVED" if wc_product.get("stock_status") == "outofstock" else "ACTIVE",
        badge=badge,
        featured=bool(wc_product.get("featured")),
        meta_title=_meta_value(wc_product, "_yoast_wpseo_title"),
        meta_description=_meta_value(wc_product, "_yoast_wpseo_metadesc"),
        published_at=_parse_date(wc_product.get("date_created")),
        source_id=wc_product.get("id"),
    )


async def migrate_image(image_url: str, product_id: str, index: int,
                        downloader: DownloaderDelegate, file_manager: FileManagerDelegate) -> Optional[str]:
    """Copies one image into the data store. Returns its stored location, or None on failure."""
    content = await downloader.download_image(image_url)
    if content is None:
        logger.error("  Failed to download image: %s", image_url)
        return None
    try:
        return file_manager.save_image(product_id, index, content, image_extension(image_url))
    except OSError as e:
        logger.error("  Error migrating image %s: %s", image_url, e)
        return None


async def step_fetch_samples(wc: WooCommerceDelegate, file_manager: FileManagerDelegate) -> int:
    """Saves every published product as raw JSON so the parser can be checked offline."""
    logger.info("--- FETCHING WOOCOMMERCE SAMPLES ---")
    products = await wc.fetch_all("products", {"status": "publish"}, per_page=config.PER_PAGE)
    logger.info("Fetched %d products", len(products))

    for product in products:
        saved_path = file_manager.save_sample(product)
        logger.info("Saved: %s", saved_path.name)
        logger.debug("  Name: %s | short_description: %d chars | description: %d chars",
                     product.get("name"),
                     len(product.get("short_description") or ""),
                     len(product.get("description") or ""))

    logger.info("Saved %d product JSON files to: %s", len(products), file_manager.samples_path)
    return len(products)


async def step_migrate_categories(wc: WooCommerceDelegate, file_manager: FileManagerDelegate) -> Dict[int, str]:
    """Creates storefront categories. Returns WooCommerce category id -> storefront category id."""
    logger.info("--- MIGRATING CATEGORIES ---")
    wc_categories: List[Dict] = await wc.fetch("products/categories", {"per_page": config.PER_PAGE})

    category_map: Dict[int, str] = {}
    existing_slugs = file_manager.load_category_slugs()

    for wc_category in wc_categories:
        if wc_category.get("slug") == "uncategorized":
            continue

        raw_name = wc_category["name"]
        clean_name = decode_name(raw_name)
        try:
            existing = file_manager.find_category_by_name(raw_name, clean_name)
            if existing:
                category_map[wc_category["id"]] = existing["id"]
                logger.info("  ✓ Category exists: %s", clean_name)
                continue

            image = wc_category.get("image") or {}
            category = CategoryRecord(
                id=uuid.uuid4().hex,
                name=clean_name,
                slug=generate_slug(clean_name, existing_slugs),
                description=strip_html(wc_category.get("description")) or None,
                image=image.get("src") or None,
                source_id=wc_category["id"],
            )
            file_manager.save_category(category)
            category_map[wc_category["id"]] = category.id
            logger.info("  ✓ Created category: %s", clean_name)
        except Exception as e:
            logger.error("  ✗ Failed to create category %s: %s", raw_name, e)

    logger.info("Migrated %d categories", len(category_map))
    return category_map


async def step_migrate_products(wc: WooCommerceDelegate, downloader: DownloaderDelegate,
                                file_manager: FileManagerDelegate, category_map: Dict[int, str],
                                limit: Optional[int] = None) -> MigrationSummary:
    """Migrates published products page by page. `limit` stops after that many products."""
    logger.info("--- MIGRATING PRODUCTS ---")
    existing_slugs, existing_skus = file_manager.load_existing_slugs_and_skus()

    per_page = min(limit, config.PER_PAGE) if limit else config.PER_PAGE
    total_pages = 1 if limit else await wc.get_total_pages("products", per_page)
    summary = MigrationSummary()

    for page in range(1, total_pages + 1):
        logger.info("Fetching page %d/%d...", page, total_pages)
        wc_products: List[Dict] = await wc.fetch("products", {"per_page": per_page, "page": page, "status": "publish"})
        to_process = wc_products[:limit - summary.migrated] if limit else wc_products

        for wc_product in to_process:
            logger.info("Processing: %s", wc_product.get("name"))
            product = None
            try:
                wc_sku = wc_product.get("sku")
                if wc_sku and wc_sku in existing_skus:
                    logger.info("  → Skipping (SKU exists): %s", wc_sku)
                    summary.skipped += 1
                    continue

                product = build_product_record(wc_product, category_map, existing_slugs, existing_skus)
                if limit:
                    pprint(product.dict(), max_length=10, max_string=100)

                images = wc_product.get("images") or []
                if images:
                    logger.info("  → Migrating %d images...", len(images))
                for index, wc_image in enumerate(images):
                    if not wc_image or not wc_image.get("src"):
                        continue
                    url = await migrate_image(wc_image["src"], product.id, index, downloader, file_manager)
                    if url:
                        product.images.append(ProductImageRecord(
                            product_id=product.id,
                            url=url,
                            alt=wc_image.get("alt") or wc_image.get("name") or None,
                            position=index,
                        ))
                        logger.info("    ✓ Image %d uploaded", index + 1)

                file_manager.save_product(product)
                logger.info("  ✓ Created product: %s", product.id)
                summary.migrated += 1
            except Exception as e:
                logger.error("  ✗ Failed to migrate product %s: %s", wc_product.get("name"), e)
                if product is not None:
                    file_manager.discard_images(product.id)
                summary.failed += 1

            if limit and summary.migrated >= limit:
                break

        if limit and summary.migrated >= limit:
            break

    logger.info("Successfully migrated: %d products", summary.migrated)
    logger.info("Skipped: %d products", summary.skipped)
    logger.info("Failed: %d products", summary.failed)
    return summary
