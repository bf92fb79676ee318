"""
db/exceptions.py
----------------
Application-level error raised for any failed database operation.
"""


class DbError(RuntimeError):
    """
    A store operation failed.

    Wraps the underlying driver error message. Also raised when a delete
    matches no row, or when a referenced department does not exist.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
