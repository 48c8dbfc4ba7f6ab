from rest_framework.pagination import PageNumberPagination


class StandardResultsPagination(PageNumberPagination):
    """
    Query params:
    - page: page number (1-indexed)
    - limit: items per page (default 10, max 100)
    """
    page_size = 10
    page_size_query_param = "limit"
    max_page_size = 100
