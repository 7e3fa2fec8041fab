"""
Tests for customers and their credit position.
"""

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from inventory.models import Customer, Order
from .helpers import make_customer, make_order, order_item


class CustomerAPITestCase(TestCase):
    """Test the customer endpoints"""

    def setUp(self):
        self.client = APIClient()
        self.payload = {
            'customerName': 'Sharma Textiles',
            'customerType': 'Wholesale',
            'email': 'sharma@example.com',
            'phone': '919812345678',
            'city': 'Ahmedabad',
            'creditLimit': 50000,
            'address': '12 Ring Road, Ahmedabad',
        }

    def test_create_customer(self):
        response = self.client.post('/api/v1/customers/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        customer = response.data['customer']
        self.assertEqual(customer['customerName'], 'Sharma Textiles')
        self.assertEqual(customer['creditLimit'], 50000)
        self.assertEqual(customer['totalOrderValue'], 0)
        self.assertEqual(customer['remainingCredit'], 50000)
        self.assertFalse(customer['creditExceeded'])

    def test_invalid_city_rejected(self):
        self.payload['city'] = 'Nagpur'
        response = self.client.post('/api/v1/customers/', self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('city', response.data['errors'])

    def test_negative_credit_limit_rejected(self):
        self.payload['creditLimit'] = -1
        response = self.client.post('/api/v1/customers/', self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_duplicate_name_rejected(self):
        make_customer(name='Sharma Textiles')
        response = self.client.post('/api/v1/customers/', self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_credit_position_reflects_orders(self):
        customer = make_customer(credit_limit='1500.00')
        make_order(customer, [order_item(quantity=10, price=100)])
        make_order(customer, [order_item(quantity=8, price=100)], status=Order.Status.CONFIRMED)

        response = self.client.get(f'/api/v1/customers/{customer.id}/')

        self.assertEqual(response.data['customer']['totalOrderValue'], 1800)
        self.assertEqual(response.data['customer']['remainingCredit'], -300)
        self.assertTrue(response.data['customer']['creditExceeded'])

    def test_list_filters(self):
        make_customer(name='Rajesh Textiles', city=Customer.City.MUMBAI)
        make_customer(name='Delhi Silks', city=Customer.City.DELHI)

        response = self.client.get('/api/v1/customers/', {'city': 'Delhi'})
        self.assertEqual(response.data['pagination']['totalItems'], 1)
        self.assertEqual(response.data['customers'][0]['customerName'], 'Delhi Silks')

        response = self.client.get('/api/v1/customers/', {'search': 'rajesh'})
        self.assertEqual(response.data['pagination']['totalItems'], 1)

    def test_update_customer(self):
        customer = make_customer()
        response = self.client.patch(f'/api/v1/customers/{customer.id}/', {'creditLimit': 250000}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        customer.refresh_from_db()
        self.assertEqual(customer.credit_limit, 250000)

    def test_delete_customer_without_orders(self):
        customer = make_customer()
        response = self.client.delete(f'/api/v1/customers/{customer.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Customer.objects.exists())

    def test_delete_customer_with_orders_rejected(self):
        customer = make_customer()
        make_order(customer, [order_item()])

        response = self.client.delete(f'/api/v1/customers/{customer.id}/')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])
        self.assertTrue(Customer.objects.filter(pk=customer.pk).exists())


class TopCustomersTestCase(TestCase):

    def test_ranked_by_revenue(self):
        rajesh = make_customer(name='Rajesh Textiles')
        delhi = make_customer(name='Delhi Silks', city=Customer.City.DELHI)
        make_order(rajesh, [order_item(quantity=10, price=100)])
        make_order(delhi, [order_item(quantity=10, price=300)])
        make_order(delhi, [order_item(quantity=1, price=100)])

        response = APIClient().get('/api/v1/customers/top/', {'limit': 1})

        top = response.data['topCustomers']
        self.assertEqual(len(top), 1)
        self.assertEqual(top[0]['customerName'], 'Delhi Silks')
        self.assertEqual(top[0]['orderCount'], 2)
        self.assertEqual(top[0]['revenue'], 3100)
        self.assertEqual(top[0]['city'], 'Delhi')
        self.assertEqual(top[0]['customerId'], str(delhi.id))
