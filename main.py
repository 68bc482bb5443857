# main.py
import json
import logging
from flask import Flask, jsonify, render_template, request
import config
import browser
from auth import require_admin
from errors import BrowserError
from models import PageRequest, SearchRequest
from render import render_fragment

LOG = logging.getLogger(__name__)


def _payload():
    # JSON body or classic form post
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return body
    return request.form


def _audit(record: dict) -> None:
    if not config.AUDIT_LOG_PATH:
        return
    # the request already succeeded; a broken audit file must not fail it
    try:
        with open(config.AUDIT_LOG_PATH, "a") as fh:
            fh.write(json.dumps(record) + "\n")
    except OSError:
        LOG.exception("audit write failed")


def _page_response(op, result):
    _audit({
        "op": op,
        "table": result.table,
        "page": result.page,
        "term": result.term,
        "total": result.total_count,
    })
    body = {
        "html": render_fragment(result),
        "total": result.total_count,
        "page": result.page,
        "total_pages": result.total_pages,
    }
    if result.term:
        body["term"] = result.term
    return jsonify(body)


@require_admin
def admin_page():
    tables = browser.list_tables()
    return render_template("browser.html", tables=tables)


@require_admin
def tables():
    return jsonify({"tables": browser.list_tables()})


@require_admin
def table_page():
    req = PageRequest.from_payload(_payload())
    return _page_response("page", browser.fetch_page(req.table, req.page))


@require_admin
def table_search():
    req = SearchRequest.from_payload(_payload())
    return _page_response("search", browser.search_page(req.table, req.term, req.page))


def handle_browser_error(e: BrowserError):
    level = logging.WARNING if e.status >= 500 else logging.INFO
    LOG.log(level, "%s %s -> %d %s", request.method, request.path, e.status, e.message)
    return jsonify({"error": e.message}), e.status


def create_app() -> Flask:
    """Build the Flask app and register every route explicitly."""
    app = Flask(__name__)
    app.add_url_rule("/", "admin_page", admin_page, methods=["GET"])
    app.add_url_rule("/tables", "tables", tables, methods=["GET"])
    app.add_url_rule("/tables/page", "table_page", table_page, methods=["POST"])
    app.add_url_rule("/tables/search", "table_search", table_search, methods=["POST"])
    app.register_error_handler(BrowserError, handle_browser_error)
    return app


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    print("Registered routes:")
    for r in sorted([rule.rule for rule in app.url_map.iter_rules()]):
        print(" ", r)
    app.run(host="0.0.0.0", port=config.PORT)
