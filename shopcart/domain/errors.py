# shopcart/domain/errors.py


class CartError(Exception):
    """Bazowy blad domeny, status_code mapowany w routerach na HTTP."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFoundError(CartError, LookupError):
    status_code = 404


class InvalidRequestError(CartError, ValueError):
    status_code = 400


class ForbiddenError(CartError, PermissionError):
    status_code = 403


class ConflictError(CartError):
    status_code = 409


class InternalError(CartError, RuntimeError):
    status_code = 500
