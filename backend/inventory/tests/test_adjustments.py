"""
Tests for manual stock adjustments.
"""

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from inventory.models import Adjustment, Stock
from inventory.services import AdjustmentService
from utils.exceptions import InvalidAdjustmentError, StockNotFoundError, VariantNotFoundError
from .helpers import make_stock


class AdjustmentServiceTestCase(TestCase):

    def setUp(self):
        self.stock = make_stock(variants={'Red': 50, 'Blue': 20})

    def test_increase_updates_variant_and_status(self):
        adjustment = AdjustmentService.create_adjustment(self.stock.id, 'Red', 150, 'Recount after delivery')

        self.stock.refresh_from_db()
        self.assertEqual(self.stock.get_variant('Red')['quantity'], 150)
        self.assertEqual(self.stock.get_variant('Blue')['quantity'], 20)
        self.assertEqual(self.stock.status, Stock.Status.AVAILABLE)

        self.assertEqual(adjustment.prev_quantity, 50)
        self.assertEqual(adjustment.new_quantity, 150)
        self.assertEqual(adjustment.quantity_change, 100)
        self.assertEqual(adjustment.product, 'Premium Cotton')
        self.assertEqual(adjustment.stock_type, Stock.StockType.GRAY)

    def test_equal_quantity_rejected(self):
        with self.assertRaises(InvalidAdjustmentError):
            AdjustmentService.create_adjustment(self.stock.id, 'Red', 50, 'No change')
        self.assertFalse(Adjustment.objects.exists())

    def test_unknown_color_rejected(self):
        with self.assertRaises(VariantNotFoundError):
            AdjustmentService.create_adjustment(self.stock.id, 'Green', 80, 'Recount')

    def test_malformed_stock_id_is_not_found(self):
        with self.assertRaises(StockNotFoundError):
            AdjustmentService.create_adjustment('not-a-uuid', 'Red', 80, 'Recount')


class AdjustmentAPITestCase(TestCase):
    """Test the adjustment endpoints"""

    def setUp(self):
        self.client = APIClient()
        self.stock = make_stock(variants={'Red': 50})

    def post(self, **overrides):
        payload = {
            'stockId': str(self.stock.id),
            'color': 'Red',
            'newQuantity': 150,
            'reason': 'Recount after delivery',
        }
        payload.update(overrides)
        return self.client.post('/api/v1/adjustments/', payload, format='json')

    def test_create_adjustment(self):
        response = self.post()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['success'])
        self.assertEqual(response.data['message'], 'Stock adjusted successfully')
        self.assertEqual(response.data['adjustment']['prevQuantity'], 50)
        self.assertEqual(response.data['adjustment']['newQuantity'], 150)
        self.assertEqual(response.data['adjustment']['stockId'], str(self.stock.id))

        self.stock.refresh_from_db()
        self.assertEqual(self.stock.get_variant('Red')['quantity'], 150)
        self.assertEqual(self.stock.status, Stock.Status.AVAILABLE)

    def test_decrease_rejected(self):
        response = self.post(newQuantity=40)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'New quantity must be greater than previous quantity')
        self.stock.refresh_from_db()
        self.assertEqual(self.stock.get_variant('Red')['quantity'], 50)

    def test_unknown_stock_returns_404(self):
        response = self.post(stockId='00000000-0000-0000-0000-000000000000')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.post(stockId='abc')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(response.data['success'])

    def test_unknown_color_returns_400(self):
        response = self.post(color='Purple')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Adjustment.objects.exists())

    def test_missing_fields_rejected(self):
        response = self.client.post('/api/v1/adjustments/', {'stockId': str(self.stock.id)}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('newQuantity', response.data['errors'])
        self.assertIn('reason', response.data['errors'])

    def test_list_paginates(self):
        for quantity in (60, 70, 80):
            AdjustmentService.create_adjustment(self.stock.id, 'Red', quantity, f'Recount to {quantity}')

        response = self.client.get('/api/v1/adjustments/', {'limit': 2})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['adjustments']), 2)
        self.assertEqual(response.data['pagination']['totalItems'], 3)
        self.assertEqual(response.data['pagination']['totalPages'], 2)
        self.assertTrue(response.data['pagination']['hasNextPage'])

        response = self.client.get('/api/v1/adjustments/', {'limit': 2, 'page': 2})
        self.assertEqual(len(response.data['adjustments']), 1)
        self.assertFalse(response.data['pagination']['hasNextPage'])

    def test_list_filters_by_stock(self):
        other = make_stock(variants={'Red': 10})
        AdjustmentService.create_adjustment(self.stock.id, 'Red', 60, 'Recount')
        AdjustmentService.create_adjustment(other.id, 'Red', 20, 'Recount')

        response = self.client.get('/api/v1/adjustments/', {'stock': str(other.id)})

        self.assertEqual(response.data['pagination']['totalItems'], 1)
        self.assertEqual(response.data['adjustments'][0]['newQuantity'], 20)
