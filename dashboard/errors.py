# dashboard/errors.py

from sqlalchemy.exc import SQLAlchemyError

# Anything the storage client can raise while running a read query.
QUERY_FAILURES = (SQLAlchemyError, OSError)


class DataFetchError(Exception):
    """
    Raised by the data layer when a read fails.

    The message is short and safe to show to an end user; the underlying
    database error is logged where it happens and is not attached.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
