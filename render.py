# render.py
# HTML fragment for one page result: summary + table + pagination.
# The markup lives in templates/_fragment.html; these are its helpers.
import re
from typing import List, Optional
from flask import render_template
from markupsafe import Markup, escape
from models import PageResult


def highlight(value: str, term: Optional[str]) -> Markup:
    """
    Escape `value`, wrapping every case-insensitive occurrence of `term`
    in <mark>. Matches are found on the raw text and each piece is
    escaped on its own, so a term can never match inside an entity.
    """
    if not term:
        return escape(value)
    parts = re.split("(" + re.escape(term) + ")", value, flags=re.IGNORECASE)
    # odd indexes are the captured matches
    return Markup("").join(
        Markup("<mark>{}</mark>").format(p) if i % 2 else escape(p)
        for i, p in enumerate(parts)
    )


def page_window(page: int, total_pages: int) -> List[int]:
    """Numbered pages shown around `page`: page-2 .. page+2, clamped."""
    return list(range(max(1, page - 2), min(total_pages, page + 2) + 1))


def summary_text(result: PageResult) -> Markup:
    text = Markup("Showing {}-{} of {} results").format(result.start, result.end, result.total_count)
    if result.term:
        text += Markup(' for "{}"').format(result.term)
    return text


def render_fragment(result: PageResult) -> str:
    if not result.rows:
        return ""
    return render_template(
        "_fragment.html",
        result=result,
        pages=page_window(result.page, result.total_pages),
        summary=summary_text(result),
        highlight=highlight,
    )
