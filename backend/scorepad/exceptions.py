"""Player directory errors.

Raised by the service layer and translated into JSON error responses by the
players blueprint. ``field`` names the offending input when there is one.
"""


class DirectoryError(Exception):
    """Base class for all player directory errors."""
    error_code = 'error'

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self):
        return {
            'error': self.error_code,
            'message': self.message,
            'field': self.field,
        }


class NotFoundError(DirectoryError):
    """Referenced entity does not exist."""
    error_code = 'not_found'


class ConflictError(DirectoryError):
    """A uniqueness or referential rule would be violated."""
    error_code = 'conflict'


class InvalidInputError(DirectoryError):
    """Malformed arguments (paging, ids, request bodies)."""
    error_code = 'bad_request'
