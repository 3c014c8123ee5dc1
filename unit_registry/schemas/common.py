# unit_registry/schemas/common.py
from pydantic import BaseModel
from typing import Generic, List, Sequence, Type, TypeVar

from unit_registry.errors import RecordValidationError
from unit_registry.utils.pagination import Paginator

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    items: List[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int


def build_page(records: Sequence, page: int, page_size: int, schema: Type[BaseModel]) -> Page:
    """Window an ordered record list and serialise the current page."""
    try:
        paginator = Paginator(records, page_size=page_size)
        paginator.go_to(page)
    except ValueError as exc:
        raise RecordValidationError(f"Página inválida: {exc}") from exc
    return Page[schema](
        items=[schema.model_validate(r) for r in paginator.current_items],
        page=paginator.current_page,
        page_size=paginator.page_size,
        total_items=paginator.total_items,
        total_pages=paginator.total_pages,
    )
