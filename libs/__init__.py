from .models import BaseModel
from .pagination import PageNumberWithSizePagination

__all__ = [
    "BaseModel",
    "PageNumberWithSizePagination",
]
