# catalog.py
# Live table/column listings. Nothing is cached: each request sees the
# warehouse as it is now, and every identifier used in a query must be
# a member of one of these listings.
import logging
from typing import List
from config import BROWSE_CATALOG, BROWSE_SCHEMA
from db.databricks_client import run_query
from errors import MissingTableName, UnknownTable
from sql_builder import qualified_name

LOG = logging.getLogger(__name__)


def _scope_sql() -> str:
    return qualified_name(BROWSE_CATALOG, BROWSE_SCHEMA)


def table_sql(table: str) -> str:
    """Fully qualified, quoted name of `table` within the browse scope."""
    return qualified_name(BROWSE_CATALOG, BROWSE_SCHEMA, table)


def _column_values(res, name: str, default_idx: int = 0) -> List[str]:
    cols = res["columns"]
    idx = cols.index(name) if name in cols else default_idx
    return [str(r[idx]) for r in res["rows"]]


def list_tables() -> List[str]:
    """Table names in the browse scope, in warehouse order."""
    scope = _scope_sql()
    sql = f"SHOW TABLES IN {scope}" if scope else "SHOW TABLES"
    return _column_values(run_query(sql), "tableName", default_idx=1)


def resolve_table(name: str) -> str:
    """
    Check `name` against the live table list and return its quoted,
    qualified SQL form. Raises UnknownTable when it is not listed.
    """
    if not name:
        raise MissingTableName()
    if name not in list_tables():
        LOG.info("rejected unknown table %r", name)
        raise UnknownTable()
    return table_sql(name)


def list_columns(table: str) -> List[str]:
    """Column names of an already-resolved table, in table order."""
    return _column_values(run_query(f"SHOW COLUMNS IN {table_sql(table)}"), "col_name")
