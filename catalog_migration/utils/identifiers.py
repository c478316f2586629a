# catalog_migration/utils/identifiers.py
import random
import re
import string
import time
from typing import Optional, Set

_BASE36 = string.digits + string.ascii_lowercase


def strip_html(html: Optional[str]) -> str:
    """Flattens an HTML fragment to plain text. Used when no clean description was extracted."""
    if not html:
        return ""
    text = re.sub(r"<[^>]*>", " ", html)
    text = text.replace("&nbsp;", " ")
    text = re.sub(r"&#\d+;", " ", text)
    return re.sub(r"\s+", " ", text).strip()


def decode_name(name: str) -> str:
    """WooCommerce returns category names with '&' encoded."""
    return name.replace("&amp;", "&")


def generate_slug(name: str, existing_slugs: Set[str]) -> str:
    """URL slug for `name`, suffixed with -1, -2, ... until unused. Registers the result."""
    base_slug = re.sub(r"[^a-z0-9]+", "-", name.lower())
    base_slug = re.sub(r"^-|-$", "", base_slug)

    slug = base_slug
    counter = 1
    while slug in existing_slugs:
        slug = f"{base_slug}-{counter}"
        counter += 1

    existing_slugs.add(slug)
    return slug


def _random_token(length: int = 6) -> str:
    return "".join(random.choice(_BASE36) for _ in range(length))


def generate_sku(sku: Optional[str], existing_skus: Set[str]) -> str:
    """Keeps the WooCommerce SKU when free, invents one when missing. Registers the result."""
    if not sku:
        sku = f"WC-{int(time.time() * 1000)}-{_random_token()}"

    final_sku = sku
    counter = 1
    while final_sku in existing_skus:
        final_sku = f"{sku}-{counter}"
        counter += 1

    existing_skus.add(final_sku)
    return final_sku
