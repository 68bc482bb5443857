# models.py
# Request schemas (one per operation) and the page result.
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from config import PAGE_SIZE
from errors import InvalidRequest, MissingSearchTerm, MissingTableName

Row = Dict[str, str]


def _text(payload: Mapping, key: str) -> str:
    val = payload.get(key)
    if val is None:
        return ""
    if not isinstance(val, str):
        raise InvalidRequest(f"{key} must be a string")
    return val.strip()


# largest page whose OFFSET still fits a signed 64-bit integer
MAX_PAGE = (2 ** 63 - 1) // PAGE_SIZE + 1


def parse_page(val: Any) -> int:
    """Integer page number; anything below 1 is treated as page 1."""
    if val is None or val == "":
        return 1
    if isinstance(val, bool) or (isinstance(val, float) and not val.is_integer()):
        raise InvalidRequest("page must be an integer")
    try:
        page = int(val)
    except (TypeError, ValueError):
        raise InvalidRequest("page must be an integer")
    if page > MAX_PAGE:
        raise InvalidRequest("page out of range")
    return max(page, 1)


@dataclass
class PageRequest:
    table: str
    page: int = 1

    @classmethod
    def from_payload(cls, payload: Mapping) -> "PageRequest":
        table = _text(payload, "table_name")
        if not table:
            raise MissingTableName()
        return cls(table=table, page=parse_page(payload.get("page")))


@dataclass
class SearchRequest:
    table: str
    term: str
    page: int = 1

    @classmethod
    def from_payload(cls, payload: Mapping) -> "SearchRequest":
        table = _text(payload, "table_name")
        if not table:
            raise MissingTableName()
        term = _text(payload, "search_term")
        if not term:
            raise MissingSearchTerm()
        return cls(table=table, term=term, page=parse_page(payload.get("page")))


@dataclass
class PageResult:
    rows: List[Row]
    total_count: int
    page: int
    page_size: int = PAGE_SIZE
    term: Optional[str] = None
    columns: List[str] = field(default_factory=list)
    table: str = ""

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def start(self) -> int:
        return (self.page - 1) * self.page_size + 1

    @property
    def end(self) -> int:
        return min(self.page * self.page_size, self.total_count)
