# catalog_migration/utils/__init__.py

from .identifiers import strip_html, decode_name, generate_slug, generate_sku
