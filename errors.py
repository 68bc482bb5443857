# errors.py
# Failure kinds returned to the caller as {"error": message}.


class BrowserError(Exception):
    status = 500
    message = "Error loading data"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthorized(BrowserError):
    status = 401
    message = "Unauthorized access"


class MissingTableName(BrowserError):
    status = 400
    message = "Table name is required"


class MissingSearchTerm(BrowserError):
    status = 400
    message = "Search term is required"


class InvalidRequest(BrowserError):
    status = 400
    message = "Invalid request"


class UnknownTable(BrowserError):
    status = 404
    message = "Table not found"


class NoData(BrowserError):
    """Empty table or no match. Reported to the user, not a fault."""
    status = 404
    message = "No data found or table is empty"


class StoreError(BrowserError):
    status = 500
    message = "Error loading data"
