"""
Custom exceptions for the Textile ERP.

Business-rule failures raised from the service layer, plus the DRF
exception handler that renders every error as ``{success: false, message}``.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import ProtectedError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class StockNotFoundError(APIException):
    """
    Exception raised when a stock document referenced by id, or by
    product and colour, cannot be found.
    """
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Stock not found.'
    default_code = 'stock_not_found'


class OrderNotFoundError(APIException):
    """
    Exception raised when a return references an unknown order.
    """
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Order not found.'
    default_code = 'order_not_found'


class VariantNotFoundError(APIException):
    """
    Exception raised when a colour is not one of the stock's variants.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Color not found in stock variants.'
    default_code = 'variant_not_found'


class InsufficientStockError(APIException):
    """
    Exception raised when an order needs more than a variant holds.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Insufficient stock for this order.'
    default_code = 'insufficient_stock'


class CreditLimitExceededError(APIException):
    """
    Exception raised when an order would push a customer past their credit limit.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Order exceeds the customer credit limit.'
    default_code = 'credit_limit_exceeded'


class InvalidStatusTransitionError(APIException):
    """
    Exception raised when attempting an invalid status transition.
    Orders only move from pending to confirmed.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid status transition.'
    default_code = 'invalid_status_transition'


class ReturnLockedError(APIException):
    """
    Exception raised when modifying a return that was already approved or rejected.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'This return has already been processed and cannot be modified.'
    default_code = 'return_locked'


class InvalidAdjustmentError(APIException):
    """
    Exception raised when an adjustment does not increase the variant quantity.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'New quantity must be greater than previous quantity'
    default_code = 'invalid_adjustment'


def _first_message(detail):
    """Dig the first human readable message out of a nested error detail."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = _first_message(value)
            if key in ('detail', 'non_field_errors', '__all__') or not message:
                return message
            return f"{key}: {message}"
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def api_exception_handler(exc, context):
    """
    Render errors as ``{"success": false, "message": ...}``.

    Validation problems become 400, unknown identifiers 404, and anything
    unexpected is logged server-side and answered with a generic 500.
    """
    if isinstance(exc, DjangoValidationError):
        detail = exc.message_dict if hasattr(exc, 'error_dict') else exc.messages
        exc = ValidationError(detail=detail)
    elif isinstance(exc, ProtectedError):
        return Response(
            {'success': False, 'message': 'This record is referenced by other records and cannot be deleted'},
            status=status.HTTP_400_BAD_REQUEST
        )

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {exc}")
        return Response(
            {'success': False, 'message': 'Server Error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if isinstance(exc, Http404):
        message = 'Not found'
    else:
        message = _first_message(response.data) or 'Request failed'

    body = {'success': False, 'message': message}
    if isinstance(exc, ValidationError):
        body['errors'] = response.data
    response.data = body
    return response
