# catalog_migration/config.py

import os
# Import the 'Path' object for handling file paths in a way that works on any OS (Windows, macOS, Linux)
from pathlib import Path

from dotenv import load_dotenv

# Pick up WC_* credentials from a local .env file when one exists.
load_dotenv()

# --- WooCommerce Settings ---
# The storefront we are migrating away from.
WC_URL = os.getenv("WC_URL", "https://jingojump.com")
# REST API prefix for WooCommerce v3.
WC_API_PATH = "/wp-json/wc/v3/"
# Consumer key/secret pair generated under WooCommerce > Settings > Advanced > REST API.
WC_CONSUMER_KEY = os.getenv("WC_CONSUMER_KEY", "")
WC_CONSUMER_SECRET = os.getenv("WC_CONSUMER_SECRET", "")

# --- Paging Settings ---
# WooCommerce caps per_page at 100.
PER_PAGE = 100
# Number of products migrated by --test.
TEST_LIMIT = 5
# Stock assigned to "instock" products that don't track a quantity.
DEFAULT_IN_STOCK_QUANTITY = 10

# --- File Path Settings ---
# This line gets the path to the directory where this config.py file is located.
PACKAGE_PATH = Path(__file__).parent
# All migrated categories, products, images and raw API samples are saved here.
DATA_PATH = Path(os.getenv("MIGRATION_DATA_PATH", PACKAGE_PATH.parent / "data"))

# --- Network Settings ---
# The User-Agent string sent with every API and image request.
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/108.0.0.0 Safari/537.36"
# Timeouts in seconds.
REQUEST_TIMEOUT = 30
IMAGE_TIMEOUT = 60
