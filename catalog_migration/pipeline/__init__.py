# catalog_migration/pipeline/__init__.py

# This file makes the step functions directly available from the 'pipeline' package.
from .steps import step_fetch_samples, step_migrate_categories, step_migrate_products, build_product_record
from .analysis import analyze_samples, render_report
