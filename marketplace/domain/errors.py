# marketplace/domain/errors.py


class MarketplaceError(Exception):
    """
    Base for every error a use case reports to its caller.
    status_code and code are stable and end up in the HTTP response.
    """

    status_code = 500
    code = "InternalError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(MarketplaceError):
    status_code = 401
    code = "Unauthenticated"


class InvalidCredential(MarketplaceError):
    status_code = 401
    code = "InvalidCredential"


class InvalidInput(MarketplaceError):
    status_code = 400
    code = "InvalidInput"


class MissingField(InvalidInput):
    code = "MissingField"


class InvalidQuantity(InvalidInput):
    code = "InvalidQuantity"


class EmptyCart(MarketplaceError):
    status_code = 400
    code = "EmptyCart"


class Forbidden(MarketplaceError):
    status_code = 403
    code = "Forbidden"


class NotFound(MarketplaceError):
    status_code = 404
    code = "NotFound"


class NotFoundOrForbidden(NotFound):
    # missing and not-yours look the same from outside
    code = "NotFoundOrForbidden"


class Conflict(MarketplaceError):
    status_code = 409
    code = "Conflict"


class StorageError(MarketplaceError):
    status_code = 503
    code = "StorageError"
