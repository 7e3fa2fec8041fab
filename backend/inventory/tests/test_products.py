"""
Tests for the product catalogue and the product/stock/order repair operations.
"""

import shutil
import tempfile

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from inventory.models import Adjustment, Order, Product, Stock
from inventory.services import ProductService
from .helpers import make_customer, make_order, make_product, make_stock, order_item


class ProductModelTestCase(TestCase):

    def test_sku_derived_from_id(self):
        product = make_product()
        self.assertEqual(product.sku, f"SKU-{product.id.hex[-6:].upper()}")

    def test_explicit_sku_kept(self):
        product = make_product(sku='COT-001')
        self.assertEqual(product.sku, 'COT-001')

    def test_total_stock(self):
        product = make_product(colors=('Red', 'Blue', 'Green'), stock_in_meters=120)
        self.assertEqual(product.total_stock, 360)
        self.assertEqual(product.colors, ['Red', 'Blue', 'Green'])


class ProductAPITestCase(TestCase):
    """Test the product CRUD endpoints"""

    def setUp(self):
        self.client = APIClient()
        self.payload = {
            'productName': 'Premium Cotton',
            'category': 'Cotton Fabrics',
            'unit': 'METERS',
            'variants': [
                {'color': 'Red', 'pricePerMeters': 120, 'stockInMeters': 500},
                {'color': 'Blue', 'pricePerMeters': 110, 'stockInMeters': 300},
            ],
            'stockInfo': {'minimumStock': 100, 'reorderPoint': 150, 'storageLocation': 'Rack A'},
        }

    def test_create_product(self):
        response = self.client.post('/api/v1/products/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        product = response.data['product']
        self.assertEqual(product['productName'], 'Premium Cotton')
        self.assertTrue(product['sku'].startswith('SKU-'))
        self.assertEqual(product['totalStock'], 800)
        self.assertEqual(product['stockInfo']['minimumStock'], 100)
        self.assertEqual(product['variants'][0]['pricePerMeters'], 120)

        stored = Product.objects.get()
        self.assertEqual(stored.storage_location, 'Rack A')
        self.assertEqual(stored.variants[1]['stock_in_meters'], 300)

    def test_duplicate_colors_rejected(self):
        self.payload['variants'][1]['color'] = 'red'
        response = self.client.post('/api/v1/products/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])
        self.assertFalse(Product.objects.exists())

    def test_duplicate_name_rejected(self):
        make_product(name='Premium Cotton')
        response = self.client.post('/api/v1/products/', self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_variants_required(self):
        self.payload['variants'] = []
        response = self.client.post('/api/v1/products/', self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_too_many_images_rejected(self):
        self.payload['images'] = [f'/uploads/products/{index}.jpg' for index in range(6)]
        response = self.client.post('/api/v1/products/', self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_pagination(self):
        for index in range(3):
            make_product(name=f'Fabric {index}')

        response = self.client.get('/api/v1/products/', {'page': 1, 'limit': 2})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['products']), 2)
        self.assertEqual(response.data['pagination'], {
            'currentPage': 1,
            'totalPages': 2,
            'totalItems': 3,
            'itemsPerPage': 2,
            'hasNextPage': True,
            'hasPrevPage': False,
        })

    def test_page_past_the_end_is_empty(self):
        make_product()
        response = self.client.get('/api/v1/products/', {'page': 5})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['products'], [])
        self.assertEqual(response.data['pagination']['totalItems'], 1)

    def test_search_and_sort(self):
        make_product(name='Silk Saree')
        make_product(name='Cotton Voile')
        make_product(name='Art Silk')

        response = self.client.get('/api/v1/products/', {'search': 'silk', 'sort': 'productName'})

        names = [product['productName'] for product in response.data['products']]
        self.assertEqual(names, ['Art Silk', 'Silk Saree'])

    def test_retrieve_and_delete(self):
        product = make_product()

        response = self.client.get(f'/api/v1/products/{product.id}/')
        self.assertEqual(response.data['product']['productName'], 'Premium Cotton')

        response = self.client.delete(f'/api/v1/products/{product.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Product deleted successfully')
        self.assertFalse(Product.objects.exists())

    def test_product_names_sorted(self):
        make_product(name='Silk Saree')
        make_product(name='Art Silk')

        response = self.client.get('/api/v1/products/names/')
        self.assertEqual(response.data['productNames'], ['Art Silk', 'Silk Saree'])


class ProductUpdateSyncTestCase(TestCase):
    """Product updates are carried over to stock and order records"""

    def setUp(self):
        self.client = APIClient()
        self.product = make_product(name='Premium Cotton', colors=('Red', 'Blue'))
        self.stock = make_stock(product='Premium Cotton', variants={'Red': 40, 'Blue': 60})
        self.order = make_order(make_customer(), [order_item(product='Premium Cotton')])

    def test_update_syncs_stock_and_renames_references(self):
        Adjustment.objects.create(
            stock=self.stock, product='Premium Cotton', stock_type=self.stock.stock_type,
            color='Red', prev_quantity=30, new_quantity=40, reason='Recount'
        )

        response = self.client.patch(f'/api/v1/products/{self.product.id}/', {
            'productName': 'Premium Cotton Deluxe',
            'variants': [
                {'color': 'Red', 'pricePerMeters': 130, 'stockInMeters': 500},
                {'color': 'Green', 'pricePerMeters': 130, 'stockInMeters': 200},
            ],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.stock.refresh_from_db()
        self.assertEqual(self.stock.product_name, 'Premium Cotton Deluxe')
        self.assertEqual(self.stock.get_variant('Red')['quantity'], 40)
        self.assertEqual(self.stock.get_variant('Green')['quantity'], 200)
        self.assertIsNone(self.stock.get_variant('Blue'))
        self.assertEqual(self.stock.stock_details['sku'], self.product.sku)

        self.order.refresh_from_db()
        self.assertEqual(self.order.order_items[0]['product'], 'Premium Cotton Deluxe')
        self.assertEqual(Adjustment.objects.get().product, 'Premium Cotton Deluxe')

    def test_update_without_rename_keeps_order_items(self):
        response = self.client.patch(f'/api/v1/products/{self.product.id}/', {
            'description': 'Soft combed cotton',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.order_items[0]['product'], 'Premium Cotton')

    def test_rename_to_existing_name_rejected(self):
        make_product(name='Silk Saree')
        response = self.client.patch(f'/api/v1/products/{self.product.id}/', {
            'productName': 'Silk Saree',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_recent_orders_for_product(self):
        response = self.client.get(f'/api/v1/products/{self.product.id}/recent-orders/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['orders']), 1)
        self.assertEqual(response.data['orders'][0]['orderNumber'], self.order.order_number)
        self.assertEqual(response.data['orders'][0]['itemsTotal'], 1000)

    def test_top_products(self):
        make_order(make_customer(name='Fashion Hub'), [order_item(product='Silk Saree', quantity=5, price=400)])

        response = self.client.get('/api/v1/products/top/', {'limit': 1})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        top = response.data['topProducts']
        self.assertEqual(len(top), 1)
        self.assertEqual(top[0]['productName'], 'Silk Saree')
        self.assertEqual(top[0]['revenue'], 2000)
        self.assertEqual(top[0]['orders'], 1)


class ProductRepairTestCase(TestCase):

    def test_find_similar_product(self):
        known = ['Premium Cotton', 'Silk Saree', 'Silk Scarf']
        self.assertEqual(ProductService.find_similar_product('Cotton Old', known), 'Premium Cotton')
        self.assertIsNone(ProductService.find_similar_product('Silk', known))
        self.assertIsNone(ProductService.find_similar_product('Linen', known))
        self.assertIsNone(ProductService.find_similar_product('', known))

    def test_fix_renamed_products(self):
        make_product(name='Premium Cotton')
        order = make_order(make_customer(), [
            order_item(product='Cotton Old'),
            order_item(product='Linen Blend'),
        ])

        response = APIClient().post('/api/v1/products/fix-renamed/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalOrders'], 1)
        self.assertEqual(response.data['totalUpdated'], 1)
        self.assertEqual(response.data['unresolved'], ['Linen Blend'])

        order.refresh_from_db()
        self.assertEqual(order.order_items[0]['product'], 'Premium Cotton')
        self.assertEqual(order.order_items[1]['product'], 'Linen Blend')

    def test_fix_stock_inconsistencies(self):
        make_product(name='Premium Cotton')
        stock = make_stock(product='Cotton')

        result = ProductService.fix_stock_inconsistencies()

        self.assertEqual(result['totalFixed'], 1)
        stock.refresh_from_db()
        self.assertEqual(stock.product_name, 'Premium Cotton')

    def test_sync_stocks_with_products(self):
        make_product(name='Premium Cotton', colors=('Red', 'Green'))
        stock = make_stock(product='Premium Cotton', variants={'Red': 70, 'Blue': 30})
        make_stock(product='Unknown Fabric')

        result = ProductService.sync_stocks_with_products()

        self.assertEqual(result['syncedCount'], 1)
        self.assertEqual(result['skippedCount'], 1)
        self.assertEqual(result['errors'], [])

        stock.refresh_from_db()
        self.assertEqual([v['color'] for v in stock.variants], ['Red', 'Green'])
        self.assertEqual(stock.get_variant('Red')['quantity'], 70)
        self.assertEqual(stock.get_variant('Green')['quantity'], 0)
        self.assertEqual(stock.status, Stock.Status.LOW)


class ProductImageUploadTestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.media_root = tempfile.mkdtemp()
        self.override = override_settings(MEDIA_ROOT=self.media_root)
        self.override.enable()

    def tearDown(self):
        self.override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def test_upload_images(self):
        files = [
            SimpleUploadedFile('front.png', b'\x89PNG\r\n\x1a\n', content_type='image/png'),
            SimpleUploadedFile('back.jpg', b'\xff\xd8\xff\xe0', content_type='image/jpeg'),
        ]
        response = self.client.post('/api/v1/products/upload-images/', {'images': files}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['imagePaths']), 2)
        for path in response.data['imagePaths']:
            self.assertTrue(path.startswith('/uploads/products/'))

    def test_unsupported_type_rejected(self):
        upload = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
        response = self.client.post('/api/v1/products/upload-images/', {'images': [upload]}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])

    def test_no_files_rejected(self):
        response = self.client.post('/api/v1/products/upload-images/', {}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
