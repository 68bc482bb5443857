# sql_builder.py
# SQL text for the browser queries. Identifiers are quoted here and
# nowhere else; values always travel as :name parameters.
from typing import Dict, List, Optional, Tuple

# escape character for LIKE patterns (ESCAPE '!')
LIKE_ESCAPE = "!"
_LIKE_SPECIALS = (LIKE_ESCAPE, "%", "_")


def quote_identifier(name: str) -> str:
    # backtick quoting; an embedded backtick is doubled
    if not name:
        raise ValueError("empty identifier")
    return "`" + name.replace("`", "``") + "`"


def qualified_name(*parts: str) -> str:
    """Quote each non-empty part and join with dots: `cat`.`sch`.`tbl`."""
    return ".".join(quote_identifier(p) for p in parts if p)


def escape_like(term: str) -> str:
    """Escape LIKE metacharacters so `term` only matches literally."""
    out = []
    for ch in term:
        if ch in _LIKE_SPECIALS:
            out.append(LIKE_ESCAPE)
        out.append(ch)
    return "".join(out)


def contains_pattern(term: str) -> str:
    # lower-cased because the column side is lower-cased too
    return "%" + escape_like(term.lower()) + "%"


def build_search_filter(columns: List[str], term: str) -> Tuple[str, Dict[str, str]]:
    """
    Build `col1 LIKE :term_0 OR col2 LIKE :term_1 ...` over every column.
    Returns ("", {}) for an empty column list; callers treat that as no match.
    """
    if not columns:
        return "", {}
    pattern = contains_pattern(term)
    fragments = []
    params = {}
    for i, col in enumerate(columns):
        name = f"term_{i}"
        fragments.append(
            f"LOWER(CAST({quote_identifier(col)} AS STRING)) LIKE :{name} ESCAPE '{LIKE_ESCAPE}'"
        )
        params[name] = pattern
    return " OR ".join(fragments), params


def build_page_query(table_sql: str, limit: int, offset: int, where: Optional[str] = None) -> str:
    limit, offset = int(limit), int(offset)
    if limit <= 0 or offset < 0:
        raise ValueError("limit/offset out of bounds")
    parts = [f"SELECT * FROM {table_sql}"]
    if where:
        parts.append(f"WHERE {where}")
    parts.append(f"LIMIT {limit} OFFSET {offset}")
    return "\n".join(parts)


def build_count_query(table_sql: str, where: Optional[str] = None) -> str:
    sql = f"SELECT COUNT(*) AS total FROM {table_sql}"
    if where:
        sql += f"\nWHERE {where}"
    return sql
