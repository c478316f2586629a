# catalog_migration/parsing/__init__.py

from .spec_extractor import parse_specs, extract_table_value, extract_description, clean_value
