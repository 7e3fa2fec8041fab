"""
Tests for stock status derivation and the stock API.
"""

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from inventory.models import Adjustment, Order, Stock
from inventory.services import StockService
from .helpers import make_customer, make_order, make_stock, order_item


class StockStatusTestCase(TestCase):
    """Status is derived from the variant quantities on every save"""

    def test_derive_status_thresholds(self):
        self.assertEqual(Stock.derive_status(0), Stock.Status.OUT)
        self.assertEqual(Stock.derive_status(1), Stock.Status.LOW)
        self.assertEqual(Stock.derive_status(99.5), Stock.Status.LOW)
        self.assertEqual(Stock.derive_status(100), Stock.Status.AVAILABLE)

    def test_processing_kept_while_quantity_remains(self):
        self.assertEqual(Stock.derive_status(40, Stock.Status.PROCESSING), Stock.Status.PROCESSING)
        self.assertEqual(Stock.derive_status(400, Stock.Status.PROCESSING), Stock.Status.PROCESSING)
        self.assertEqual(Stock.derive_status(0, Stock.Status.PROCESSING), Stock.Status.OUT)

    def test_save_recomputes_status(self):
        stock = make_stock(variants={'Red': 60, 'Blue': 30})
        self.assertEqual(stock.status, Stock.Status.LOW)

        stock.variants[0]['quantity'] = 160
        stock.save()
        stock.refresh_from_db()
        self.assertEqual(stock.status, Stock.Status.AVAILABLE)

        for variant in stock.variants:
            variant['quantity'] = 0
        stock.save()
        stock.refresh_from_db()
        self.assertEqual(stock.status, Stock.Status.OUT)

    def test_supplied_status_is_overridden(self):
        stock = make_stock(variants={'Red': 500}, status=Stock.Status.OUT)
        self.assertEqual(stock.status, Stock.Status.AVAILABLE)

    def test_update_fields_save_persists_status(self):
        stock = make_stock(variants={'Red': 500})
        stock.variants[0]['quantity'] = 5
        stock.save(update_fields=['variants'])
        stock.refresh_from_db()
        self.assertEqual(stock.status, Stock.Status.LOW)

    def test_recompute_all_statuses_dry_run(self):
        stock = make_stock(variants={'Red': 500})
        Stock.objects.filter(pk=stock.pk).update(status=Stock.Status.OUT)

        changes = StockService.recompute_all_statuses(dry_run=True)
        self.assertEqual([(c[1], c[2]) for c in changes], [(Stock.Status.OUT, Stock.Status.AVAILABLE)])
        stock.refresh_from_db()
        self.assertEqual(stock.status, Stock.Status.OUT)

        StockService.recompute_all_statuses()
        stock.refresh_from_db()
        self.assertEqual(stock.status, Stock.Status.AVAILABLE)


class StockAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()

    def test_create_stock_with_type_and_variants_only(self):
        response = self.client.post('/api/v1/stock/', {
            'stockType': 'Gray Stock',
            'variants': [{'color': 'Red', 'quantity': 50, 'unit': 'METERS'}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['stock']['status'], 'low')
        self.assertEqual(response.data['stock']['totalQuantity'], 50)

    def test_create_stock_with_details(self):
        response = self.client.post('/api/v1/stock/', {
            'stockType': 'Design Stock',
            'variants': [{'color': 'Red', 'quantity': 150}],
            'stockDetails': {'product': 'Premium Cotton', 'design': 'Floral Print', 'warehouse': 'Main Warehouse - Mumbai'},
            'additionalInfo': {'batchNumber': 'B-12', 'qualityGrade': 'A+'},
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        stock = Stock.objects.get()
        self.assertEqual(stock.product_name, 'Premium Cotton')
        self.assertEqual(stock.batch_number, 'B-12')
        self.assertEqual(stock.quality_grade, 'A+')
        self.assertEqual(response.data['stock']['product'], 'Premium Cotton')
        self.assertEqual(response.data['stock']['additionalInfo']['batchNumber'], 'B-12')

    def test_invalid_processing_stage_rejected(self):
        response = self.client.post('/api/v1/stock/', {
            'stockType': 'Factory Stock',
            'variants': [{'color': 'Red', 'quantity': 150}],
            'stockDetails': {'product': 'Premium Cotton', 'processingStage': 'Weaving'},
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])

    def test_non_string_details_rejected(self):
        response = self.client.post('/api/v1/stock/', {
            'stockType': 'Gray Stock',
            'variants': [{'color': 'Red', 'quantity': 150}],
            'stockDetails': {'product': 'Premium Cotton', 'factory': 123, 'agent': {'name': 'Ramesh'}},
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('stockDetails', response.data['errors'])
        self.assertFalse(Stock.objects.exists())

    def test_duplicate_variant_colors_rejected(self):
        response = self.client.post('/api/v1/stock/', {
            'stockType': 'Gray Stock',
            'variants': [{'color': 'Red', 'quantity': 10}, {'color': 'red', 'quantity': 5}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_negative_quantity_rejected(self):
        response = self.client.post('/api/v1/stock/', {
            'stockType': 'Gray Stock',
            'variants': [{'color': 'Red', 'quantity': -1}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_filters_by_type_and_ignores_all(self):
        make_stock(stock_type=Stock.StockType.GRAY)
        make_stock(stock_type=Stock.StockType.DESIGN)

        response = self.client.get('/api/v1/stock/', {'stockType': 'Design Stock'})
        self.assertEqual(response.data['pagination']['totalItems'], 1)
        self.assertEqual(response.data['stocks'][0]['stockType'], 'Design Stock')

        response = self.client.get('/api/v1/stock/', {'stockType': 'all'})
        self.assertEqual(response.data['pagination']['totalItems'], 2)

    def test_update_recomputes_status(self):
        stock = make_stock(variants={'Red': 500})
        response = self.client.patch(f'/api/v1/stock/{stock.id}/', {
            'variants': [{'color': 'Red', 'quantity': 0}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['stock']['status'], 'out')

    def test_delete_keeps_adjustment_history(self):
        stock = make_stock(variants={'Red': 50})
        Adjustment.objects.create(
            stock=stock, product='Premium Cotton', stock_type=stock.stock_type,
            color='Red', prev_quantity=40, new_quantity=50, reason='Recount'
        )

        response = self.client.delete(f'/api/v1/stock/{stock.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(Adjustment.objects.get().stock)

    def test_unknown_stock_is_404(self):
        response = self.client.get('/api/v1/stock/00000000-0000-0000-0000-000000000000/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {'success': False, 'message': 'Not found'})


class StockAggregateTestCase(TestCase):

    def setUp(self):
        self.client = APIClient()

    def test_summary(self):
        make_stock(variants={'Red': 5, 'Blue': 200})
        make_stock(variants={'Red': 0})

        response = self.client.get('/api/v1/stock/summary/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalStocks'], 2)
        self.assertEqual(response.data['totalStockValue'], 20500)
        self.assertEqual(response.data['lowStockItems'], 1)
        self.assertEqual(response.data['outOfStockItems'], 1)
        self.assertEqual(response.data['statusCounts']['out'], 1)
        self.assertEqual(response.data['stockTurnover'], 0)

    def test_turnover_uses_month_to_date_confirmed_sales(self):
        make_stock(variants={'Red': 100})
        customer = make_customer()
        make_order(customer, [order_item(quantity=20, price=100)], status=Order.Status.CONFIRMED)
        make_order(customer, [order_item(quantity=50, price=100)])

        summary = StockService.get_summary()
        self.assertEqual(summary['stockTurnover'], 0.2)

    def test_category_breakdown_sorted_descending(self):
        make_stock(stock_type=Stock.StockType.GRAY, variants={'Red': 100})
        make_stock(stock_type=Stock.StockType.FACTORY, variants={'Red': 300})

        response = self.client.get('/api/v1/stock/category-breakdown/')

        breakdown = response.data['breakdown']
        self.assertEqual([entry['name'] for entry in breakdown], ['Factory Stock', 'Gray Stock'])
        self.assertEqual(breakdown[0]['fill'], '#82ca9d')
        self.assertEqual(breakdown[1]['value'], 100)

    def test_movement_report(self):
        stock = make_stock(variants={'Red': 50})
        Adjustment.objects.create(
            stock=stock, product='Premium Cotton', stock_type=stock.stock_type,
            color='Red', prev_quantity=50, new_quantity=150, reason='Delivery'
        )
        customer = make_customer()
        make_order(customer, [order_item(quantity=30)], status=Order.Status.CONFIRMED)
        make_order(customer, [order_item(quantity=70)])

        year = Adjustment.objects.get().created_at.year
        response = self.client.get('/api/v1/stock/movement/', {'year': year})

        movement = response.data['movement']
        self.assertEqual(len(movement), 12)
        self.assertEqual(sum(month['inbound'] for month in movement), 100)
        self.assertEqual(sum(month['outbound'] for month in movement), 30)
        self.assertEqual(sum(month['net'] for month in movement), 70)
