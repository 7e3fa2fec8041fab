"""
Product Service

Product lifecycle plus the repair operations that keep stock documents and
order line items (which reference products by name) consistent with the
product catalogue.
"""

import logging
import os
import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage
from django.db import transaction

from inventory.models import Adjustment, Order, Product, Return, Stock
from utils.constants import ALLOWED_IMAGE_TYPES, MAX_IMAGE_SIZE, MAX_PRODUCT_IMAGES
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class ProductService:

    @staticmethod
    def create_product(data: dict) -> Product:
        product = Product(**data)
        product.full_clean(exclude=['sku'])
        product.save()
        logger.info(f"Created product {product.sku} '{product.product_name}'")

        NotificationService.product_changed(product, 'Added')
        return product

    @staticmethod
    def update_product(product: Product, data: dict) -> Product:
        """
        Update a product and carry the change over to stock and order records.

        Stocks naming the product are re-synchronised. On rename, order line
        items, adjustments and returns naming the old product are renamed.
        """
        old_name = product.product_name
        stock_changes = []

        with transaction.atomic():
            for field, value in data.items():
                setattr(product, field, value)
            product.full_clean(exclude=['sku'])
            product.save()

            stocks = Stock.objects.select_for_update().filter(stock_details__product=old_name)
            for stock in stocks:
                stock_changes.append((stock, stock.status))
                ProductService.apply_product_to_stock(stock, product, seed_new_colors=True)

            if product.product_name != old_name:
                ProductService.rename_references(old_name, product.product_name)

        logger.info(f"Updated product {product.sku} '{product.product_name}'")
        NotificationService.product_changed(product, 'Updated')
        for stock, previous_status in stock_changes:
            NotificationService.stock_level_dropped(stock, previous_status)
        return product

    @staticmethod
    def delete_product(product: Product):
        NotificationService.product_changed(product, 'Deleted')
        logger.info(f"Deleting product {product.sku} '{product.product_name}'")
        product.delete()

    @staticmethod
    def apply_product_to_stock(stock: Stock, product: Product, seed_new_colors: bool = False) -> Stock:
        """
        Rebuild a stock's variants from the product's colour list.

        Quantities already on the stock are kept by colour. Colours new to the
        stock start at the product's ``stock_in_meters`` when
        ``seed_new_colors`` is set, otherwise at 0.
        """
        existing = {variant.get('color'): variant for variant in stock.variants}
        variants = []
        for product_variant in product.variants:
            color = product_variant.get('color')
            if color in existing:
                quantity = float(existing[color].get('quantity') or 0)
            elif seed_new_colors:
                quantity = float(product_variant.get('stock_in_meters') or 0)
            else:
                quantity = 0
            variants.append({'color': color, 'quantity': quantity, 'unit': product.unit})

        details = dict(stock.stock_details or {})
        details.update({
            'product': product.product_name,
            'sku': product.sku,
            'category': product.category,
        })

        stock.variants = variants
        stock.stock_details = details
        stock.save()
        return stock

    @staticmethod
    def rename_references(old_name: str, new_name: str) -> int:
        """Rename a product across order line items, adjustments and returns."""
        updated_orders = 0
        for order in Order.objects.select_for_update():
            changed = False
            for item in order.order_items:
                if item.get('product') == old_name:
                    item['product'] = new_name
                    changed = True
            if changed:
                order.save(update_fields=['order_items', 'updated_at'])
                updated_orders += 1

        Adjustment.objects.filter(product=old_name).update(product=new_name)
        Return.objects.filter(product=old_name).update(product=new_name)

        logger.info(f"Renamed '{old_name}' to '{new_name}' on {updated_orders} orders")
        return updated_orders

    @staticmethod
    def product_names() -> list:
        return list(Product.objects.order_by('product_name').values_list('product_name', flat=True))

    @staticmethod
    def find_similar_product(name: str, known_names) -> str:
        """
        Pair an unknown product name with a catalogue name that contains its
        first word. Returns None unless exactly one catalogue name matches.
        """
        words = (name or '').split()
        if not words:
            return None
        first_word = words[0].lower()
        candidates = [known for known in known_names if first_word in known.lower()]
        return candidates[0] if len(candidates) == 1 else None

    # ------------------------------------------------------------------
    # Repair operations
    # ------------------------------------------------------------------

    @staticmethod
    @transaction.atomic
    def fix_renamed_products() -> dict:
        """Re-attach order line items whose product name no longer exists."""
        known = set(ProductService.product_names())
        orders = list(Order.objects.select_for_update())
        updated = 0
        unresolved = set()

        for order in orders:
            changed = False
            for item in order.order_items:
                name = item.get('product')
                if name in known:
                    continue
                match = ProductService.find_similar_product(name, known)
                if match:
                    logger.info(f"Order {order.order_number}: '{name}' -> '{match}'")
                    item['product'] = match
                    changed = True
                else:
                    unresolved.add(name)
            if changed:
                order.save(update_fields=['order_items', 'updated_at'])
                updated += 1

        return {
            'totalOrders': len(orders),
            'totalUpdated': updated,
            'unresolved': sorted(name for name in unresolved if name),
        }

    @staticmethod
    @transaction.atomic
    def fix_stock_inconsistencies() -> dict:
        """Point stocks naming an unknown product at the matching catalogue product."""
        known = set(ProductService.product_names())
        stocks = list(Stock.objects.select_for_update())
        fixes = []

        for stock in stocks:
            name = stock.product_name
            if name in known:
                continue
            match = ProductService.find_similar_product(name, known)
            if not match:
                continue
            details = dict(stock.stock_details or {})
            details['product'] = match
            stock.stock_details = details
            stock.save()
            fixes.append({'stockId': str(stock.id), 'from': name, 'to': match})
            logger.info(f"Stock {stock.id}: '{name}' -> '{match}'")

        return {
            'totalStocks': len(stocks),
            'totalFixed': len(fixes),
            'fixes': fixes,
        }

    @staticmethod
    def sync_stocks_with_products() -> dict:
        """Rebuild the variants of every stock from its product."""
        products = {product.product_name: product for product in Product.objects.all()}
        synced = 0
        skipped = 0
        errors = []

        for stock in Stock.objects.all():
            product = products.get(stock.product_name)
            if product is None:
                skipped += 1
                continue
            previous_status = stock.status
            try:
                with transaction.atomic():
                    ProductService.apply_product_to_stock(stock, product)
                synced += 1
            except Exception as e:
                logger.exception(f"Failed to sync stock {stock.id} with '{product.product_name}'")
                errors.append({'stockId': str(stock.id), 'error': str(e)})
                continue
            NotificationService.stock_level_dropped(stock, previous_status)

        return {
            'syncedCount': synced,
            'skippedCount': skipped,
            'errors': errors,
        }

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    @staticmethod
    def save_images(files) -> list:
        """
        Store uploaded product images and return their public paths.

        Raises:
            ValidationError: no files, more than the allowed count, an
                unsupported type, or an oversized file
        """
        if not files:
            raise ValidationError({'images': 'No images uploaded'})
        if len(files) > MAX_PRODUCT_IMAGES:
            raise ValidationError({'images': f'At most {MAX_PRODUCT_IMAGES} images can be uploaded at once'})

        for upload in files:
            if upload.content_type not in ALLOWED_IMAGE_TYPES:
                raise ValidationError({'images': f'{upload.name}: only JPEG, PNG and WEBP images are allowed'})
            if upload.size > MAX_IMAGE_SIZE:
                raise ValidationError({'images': f'{upload.name}: file is larger than 5MB'})

        paths = []
        for upload in files:
            extension = os.path.splitext(upload.name)[1].lower() or ALLOWED_IMAGE_TYPES[upload.content_type]
            name = default_storage.save(f"products/{uuid.uuid4().hex}{extension}", upload)
            paths.append(f"{settings.MEDIA_URL}{name}")

        logger.info(f"Stored {len(paths)} product images")
        return paths
