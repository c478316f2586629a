# catalog_migration/models/__init__.py

# This file makes the model classes directly available from the 'models' package.
# Instead of: from catalog_migration.models.spec_models import ExtractedSpec
# We can now use: from catalog_migration.models import ExtractedSpec

from .spec_models import ExtractedSpec
from .catalog_models import CategoryRecord, ProductRecord, ProductImageRecord
