# catalog_migration/delegates/__init__.py

# This file makes the delegate classes directly available from the 'delegates' package.
# Instead of: from catalog_migration.delegates.woocommerce_delegate import WooCommerceDelegate
# We can now use: from catalog_migration.delegates import WooCommerceDelegate

from .woocommerce_delegate import WooCommerceDelegate, WooCommerceAPIError
from .downloader_delegate import DownloaderDelegate
from .file_manager_delegate import FileManagerDelegate
