# browser.py
# Page and search fetchers. Every query goes through catalog (for the
# identifier allow-list) and sql_builder (for quoting and escaping).
import logging
from typing import List, Optional
from config import PAGE_SIZE
from db.databricks_client import fetch_scalar, run_query
from errors import MissingSearchTerm, MissingTableName, NoData
from sql_builder import build_count_query, build_page_query, build_search_filter
import catalog
from models import PageResult, Row

LOG = logging.getLogger(__name__)

NO_DATA_MSG = "No data found or table is empty"
NO_MATCH_MSG = "No results found for your search"


def _display(val) -> str:
    if val is None:
        return ""
    if isinstance(val, bytes):
        return val.decode("utf-8", errors="replace")
    return str(val)


def _to_rows(res) -> List[Row]:
    cols = res["columns"]
    return [{c: _display(v) for c, v in zip(cols, r)} for r in res["rows"]]


def _offset(page: int) -> int:
    return (max(int(page), 1) - 1) * PAGE_SIZE


def fetch_page(table: str, page: int = 1) -> PageResult:
    """
    One page of `table` plus its total row count.
    Raises NoData when the page comes back empty.
    """
    if not table:
        raise MissingTableName()
    page = max(int(page), 1)
    tsql = catalog.resolve_table(table)

    res = run_query(build_page_query(tsql, PAGE_SIZE, _offset(page)))
    rows = _to_rows(res)
    if not rows:
        raise NoData(NO_DATA_MSG)
    total = int(fetch_scalar(build_count_query(tsql)) or 0)
    LOG.info("page table=%s page=%d total=%d", table, page, total)
    return PageResult(rows=rows, total_count=total, page=page, columns=res["columns"], table=table)


def search_page(table: str, term: Optional[str], page: int = 1) -> PageResult:
    """
    One page of rows of `table` where any column contains `term`
    (case-insensitive, literal match), plus the total match count.
    """
    if not table:
        raise MissingTableName()
    if not term:
        raise MissingSearchTerm()
    page = max(int(page), 1)
    tsql = catalog.resolve_table(table)

    where, params = build_search_filter(catalog.list_columns(table), term)
    if not where:
        # zero columns: nothing can match
        raise NoData(NO_MATCH_MSG)

    res = run_query(build_page_query(tsql, PAGE_SIZE, _offset(page), where), params)
    rows = _to_rows(res)
    if not rows:
        raise NoData(NO_MATCH_MSG)
    total = int(fetch_scalar(build_count_query(tsql, where), params) or 0)
    LOG.info("search table=%s page=%d term_len=%d total=%d", table, page, len(term), total)
    return PageResult(rows=rows, total_count=total, page=page, term=term,
                      columns=res["columns"], table=table)


def list_tables() -> List[str]:
    return catalog.list_tables()
