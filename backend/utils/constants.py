"""
Constants used throughout the application.
"""

# Stock status thresholds (total quantity across variants)
OUT_OF_STOCK_QUANTITY = 0
LOW_STOCK_THRESHOLD = 100

# A single variant below this counts towards the summary's low stock items
LOW_VARIANT_THRESHOLD = 10

# Stock value is estimated at a flat rate per unit
STOCK_UNIT_VALUE = 100

# Minimum used for stock alerts when the product has no configured minimum
DEFAULT_MINIMUM_STOCK = 100

# Chart fill colours for the stock category breakdown
STOCK_TYPE_COLORS = {
    'Gray Stock': '#8884d8',
    'Factory Stock': '#82ca9d',
    'Design Stock': '#ffc658',
}

# Alert label per stock type: (stockDetails key, suffix)
STOCK_TYPE_LABELS = {
    'Gray Stock': ('factory', 'Gray Stock'),
    'Factory Stock': ('processingFactory', 'Factory Stock'),
    'Design Stock': ('design', 'Design'),
}

# Order priority by days left until delivery
HIGH_PRIORITY_DAYS = 3
MEDIUM_PRIORITY_DAYS = 7

CURRENCY_SYMBOL = '₹'

MONTH_LABELS = [
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
]

# Upload limits for product images
MAX_PRODUCT_IMAGES = 5
MAX_IMAGE_SIZE = 5 * 1024 * 1024
ALLOWED_IMAGE_TYPES = {
    'image/jpeg': '.jpg',
    'image/png': '.png',
    'image/webp': '.webp',
}

# Default page sizes per resource
PAGE_SIZES = {
    'products': 12,
    'stocks': 10,
    'orders': 10,
    'customers': 10,
    'adjustments': 10,
    'messages': 4,
}
MAX_PAGE_SIZE = 100

# Window used for dashboard trend comparisons
TREND_WINDOW_DAYS = 30

# Allowed values inside a stock's detail blob
PROCESSING_STAGES = ['Dyeing', 'Printing', 'Finishing', 'Quality Check']
DESIGN_PATTERNS = ['Floral Print', 'Abstract Print', 'Geometric Design', 'Solid Colors']
WAREHOUSES = [
    'Main Warehouse - Mumbai',
    'Secondary Warehouse - Delhi',
    'Regional Warehouse - Bangalore',
]
