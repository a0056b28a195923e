# errors raised by the marketplace client and the app state


class ApiError(Exception):
    """
    Base class for anything the UI should surface to the user.
    Screens catch this and show `user_message`, the app keeps running.
    """

    user_message = "Something went wrong."

    def __str__(self) -> str:
        return self.user_message


class RequestRejectedError(ApiError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str | None = None):
        super().__init__(status_code, message)
        self.status_code = status_code
        self.user_message = message or f"Request failed (HTTP {status_code})."


class ConnectionFailedError(ApiError):
    """The request never completed (refused, DNS, timeout...)."""

    user_message = "Connection error. Is the backend reachable?"


class MalformedResponseError(ApiError):
    """The server answered, but not with the shape we expect."""

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail
        self.user_message = "Unexpected response from server."


class EmptyCartError(ApiError):
    user_message = "Cart is empty."


class InvalidRequestError(ApiError):
    """The request could not be encoded (e.g. a non-finite number)."""

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail
        self.user_message = "Invalid input, nothing was sent."
