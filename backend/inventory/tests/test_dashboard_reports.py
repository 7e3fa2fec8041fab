"""
Tests for the dashboard views and the sales reports.
"""

from datetime import date, timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from inventory.models import Order, Stock
from inventory.services import DashboardService, ReportService
from .helpers import make_customer, make_order, make_product, make_stock, order_item


class DashboardServiceTestCase(TestCase):

    def test_percentage_change(self):
        self.assertEqual(DashboardService.percentage_change(5, 0), ('+100%', 'up'))
        self.assertEqual(DashboardService.percentage_change(0, 0), ('0%', 'neutral'))
        self.assertEqual(DashboardService.percentage_change(3, 4), ('-25%', 'down'))
        self.assertEqual(DashboardService.percentage_change(2, 2), ('0%', 'neutral'))
        self.assertEqual(DashboardService.percentage_change(6, 4), ('+50%', 'up'))

    def test_order_priority(self):
        today = date(2025, 6, 1)
        self.assertEqual(DashboardService.order_priority(today - timedelta(days=1), today), 'high')
        self.assertEqual(DashboardService.order_priority(today + timedelta(days=3), today), 'high')
        self.assertEqual(DashboardService.order_priority(today + timedelta(days=4), today), 'medium')
        self.assertEqual(DashboardService.order_priority(today + timedelta(days=7), today), 'medium')
        self.assertEqual(DashboardService.order_priority(today + timedelta(days=8), today), 'low')

    def test_stock_alerts(self):
        make_product(name='Premium Cotton', minimum_stock=50)
        make_stock(product='Premium Cotton', variants={'Red': 200, 'Blue': 30})
        make_stock(product='Premium Cotton', variants={'Red': 500})
        make_stock(product='Silk Saree', variants={'Red': 0})

        alerts = {alert['product']: alert for alert in DashboardService.get_stock_alerts()}

        self.assertEqual(set(alerts), {'Premium Cotton', 'Silk Saree'})

        cotton = alerts['Premium Cotton']
        self.assertEqual(cotton['severity'], 'warning')
        self.assertEqual(cotton['minimum'], 50)
        self.assertEqual(
            [v['belowMinimum'] for v in cotton['variantsDetails']], [False, True]
        )
        self.assertEqual(cotton['stockTypeLabel'], 'Gray Stock')

        silk = alerts['Silk Saree']
        self.assertEqual(silk['severity'], 'critical')
        self.assertEqual(silk['status'], 'out')
        self.assertEqual(silk['minimum'], 100)

    def test_stock_type_label_uses_details(self):
        gray = make_stock(details={'factory': 'Surat Mills'})
        design = make_stock(
            stock_type=Stock.StockType.DESIGN,
            details={'design': 'Floral Print'},
        )
        factory = make_stock(stock_type=Stock.StockType.FACTORY)

        self.assertEqual(DashboardService.stock_type_label(gray), 'Surat Mills Gray Stock')
        self.assertEqual(DashboardService.stock_type_label(design), 'Floral Print Design')
        self.assertEqual(DashboardService.stock_type_label(factory), 'Factory Stock')


class DashboardAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.customer = make_customer()
        make_product(name='Premium Cotton')
        make_product(name='Silk Saree')

    def test_stats(self):
        make_order(self.customer, [order_item()])
        make_order(self.customer, [order_item()], status=Order.Status.CONFIRMED)
        make_stock(variants={'Red': 50})

        response = self.client.get('/api/v1/dashboard/stats/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['totalProducts'], 2)
        self.assertEqual(data['activeOrders'], 1)
        self.assertEqual(data['totalCustomers'], 1)
        self.assertEqual(data['lowStockItems'], 1)
        self.assertEqual(data['productChange'], '+100%')
        self.assertEqual(data['productTrend'], 'up')

    def test_recent_orders(self):
        order = make_order(self.customer, [order_item(quantity=10, price=100)], delivery_in_days=2)

        response = self.client.get('/api/v1/dashboard/recent-orders/')

        recent = response.data['recentOrders']
        self.assertEqual(len(recent), 1)
        self.assertEqual(recent[0]['orderNumber'], order.order_number)
        self.assertEqual(recent[0]['priority'], 'high')
        self.assertEqual(recent[0]['amount'], '₹1,000.00')
        self.assertEqual(recent[0]['quantity'], '10 METERS')
        self.assertEqual(recent[0]['product'], 'Premium Cotton')

    def test_latest_products(self):
        response = self.client.get('/api/v1/dashboard/latest-products/')

        names = {product['name'] for product in response.data['latestProducts']}
        self.assertEqual(names, {'Premium Cotton', 'Silk Saree'})

    def test_stock_alerts_endpoint(self):
        make_stock(product='Premium Cotton', variants={'Red': 0})

        response = self.client.get('/api/v1/dashboard/stock-alerts/')

        self.assertEqual(len(response.data['stockAlerts']), 1)
        self.assertEqual(response.data['stockAlerts'][0]['severity'], 'critical')


class ReportTestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        rajesh = make_customer(name='Rajesh Textiles')
        fashion = make_customer(name='Fashion Hub', city='Delhi')
        make_order(rajesh, [order_item(quantity=10, price=100)], status=Order.Status.CONFIRMED,
                   order_date=date(2025, 1, 10))
        make_order(fashion, [order_item(product='Silk Saree', quantity=5, price=400)],
                   order_date=date(2025, 1, 20))
        make_order(rajesh, [order_item(quantity=2, price=100)], order_date=date(2025, 2, 5))

    def test_sales_summary(self):
        summary = ReportService.sales_summary()

        self.assertEqual(summary['totalRevenue'], 3200)
        self.assertEqual(summary['totalOrders'], 3)
        self.assertEqual(summary['confirmedOrders'], 1)
        self.assertEqual(summary['pendingOrders'], 2)
        self.assertEqual(summary['averageOrderValue'], 1066.67)
        self.assertEqual(
            summary['monthlyPerformance'],
            [
                {'month': 'Jan 2025', 'revenue': 3000, 'orders': 2},
                {'month': 'Feb 2025', 'revenue': 200, 'orders': 1},
            ]
        )
        self.assertEqual(summary['topProducts'][0]['productName'], 'Silk Saree')
        self.assertEqual(summary['topCustomers'][0]['customerName'], 'Fashion Hub')

    def test_summary_endpoint_with_range(self):
        response = self.client.get('/api/v1/reports/summary/', {'dateFrom': '2025-02-01', 'dateTo': '2025-02-28'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        report = response.data['report']
        self.assertEqual(report['totalOrders'], 1)
        self.assertEqual(report['totalRevenue'], 200)
        self.assertEqual(report['dateFrom'], '2025-02-01')

    def test_summary_rejects_bad_dates(self):
        response = self.client.get('/api/v1/reports/summary/', {'dateFrom': '01/02/2025'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.get('/api/v1/reports/summary/', {'dateFrom': '2025-03-01', 'dateTo': '2025-01-01'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_export_csv(self):
        response = self.client.get('/api/v1/reports/export/', {'format': 'csv'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'text/csv')
        self.assertIn('attachment; filename="sales_report_', response['Content-Disposition'])
        self.assertTrue(response['Content-Disposition'].endswith('.csv"'))

        content = response.content.decode()
        self.assertIn('Sales Summary', content)
        self.assertIn('Total Revenue,3200.0', content)
        self.assertIn('Top Customers', content)

    def test_export_xlsx(self):
        response = self.client.get('/api/v1/reports/export/', {'format': 'xlsx'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response['Content-Type'],
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        self.assertTrue(response.content.startswith(b'PK'))

    def test_export_pdf(self):
        response = self.client.get('/api/v1/reports/export/', {'format': 'pdf'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertTrue(response.content.startswith(b'%PDF'))

    def test_export_rejects_unknown_format(self):
        response = self.client.get('/api/v1/reports/export/', {'format': 'docx'})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])

    def test_daily_report_message(self):
        customer = make_customer(name='Style Point')
        make_order(customer, [order_item(quantity=10, price=100)], status=Order.Status.CONFIRMED)
        make_stock(variants={'Red': 0})

        message = ReportService.daily_report_message()

        self.assertTrue(message.startswith(f"Daily Report - {timezone.localdate().strftime('%d %b %Y')}"))
        self.assertIn('Orders: 1 (1 confirmed)', message)
        self.assertIn('Revenue: ₹1,000.00', message)
        self.assertIn('Out of Stock: 1', message)
