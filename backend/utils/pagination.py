from rest_framework.pagination import BasePagination
from rest_framework.response import Response

from .constants import MAX_PAGE_SIZE


def parse_positive_int(value, default):
    try:
        value = int(value)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


class PageLimitPagination(BasePagination):
    """
    ``?page=&limit=`` pagination with the envelope the frontend expects.

    Pages past the end return an empty list rather than a 404, so
    ``totalItems`` always reflects the full collection.
    """
    default_limit = 10
    results_key = 'results'

    def __init__(self, default_limit=None, results_key=None):
        if default_limit is not None:
            self.default_limit = default_limit
        if results_key is not None:
            self.results_key = results_key

    def paginate_queryset(self, queryset, request, view=None):
        self.page = parse_positive_int(request.query_params.get('page'), 1)
        self.limit = min(
            parse_positive_int(request.query_params.get('limit'), self.default_limit),
            MAX_PAGE_SIZE
        )
        self.total = queryset.count()

        offset = (self.page - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_pagination_data(self):
        total_pages = (self.total + self.limit - 1) // self.limit
        return {
            'currentPage': self.page,
            'totalPages': total_pages,
            'totalItems': self.total,
            'itemsPerPage': self.limit,
            'hasNextPage': self.page < total_pages,
            'hasPrevPage': self.page > 1,
        }

    def get_paginated_response(self, data):
        return Response({
            'success': True,
            self.results_key: data,
            'pagination': self.get_pagination_data(),
        })
