from typing import Any

from django.core.paginator import Paginator
from django.db.models import QuerySet


class ServicePaginator:
    """Page-number pagination for service layer list operations."""

    def __init__(self, default_page_size: int = 20, max_page_size: int = 100):
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def paginate(self, queryset: QuerySet, page: Any, page_size: Any) -> dict[str, Any]:
        page_size = self._get_safe_page_size(page_size)

        paginator = Paginator(queryset, page_size)
        page_obj = paginator.get_page(self._parse_int(page, default=1))

        return {
            'items': list(page_obj),
            'pagination': {
                'page': page_obj.number,
                'page_size': page_size,
                'total_pages': paginator.num_pages,
                'total_count': paginator.count,
                'has_next': page_obj.has_next(),
                'has_previous': page_obj.has_previous(),
            },
        }

    def _get_safe_page_size(self, page_size: Any) -> int:
        value = min(self._parse_int(page_size, default=self.default_page_size), self.max_page_size)
        return value if value >= 1 else self.default_page_size

    @staticmethod
    def _parse_int(value, default: int) -> int:
        try:
            return int(value)
        except (ValueError, TypeError):
            return default
