"""API error taxonomy.

Each ApiErrorCode has exactly one HTTP status (ERROR_CODE_TO_STATUS).
Routes raise ApiError subclasses and docspace.responses renders them as
error envelopes. Service functions never raise these: they return
None/False for missing rows and the route picks the matching 404.
"""

from enum import Enum


class ApiErrorCode(str, Enum):
    """Values of the ``error.code`` field."""

    # 404
    E_NOT_FOUND = "E_NOT_FOUND"
    E_SPACE_NOT_FOUND = "E_SPACE_NOT_FOUND"
    E_ARTICLE_NOT_FOUND = "E_ARTICLE_NOT_FOUND"
    E_VERSION_NOT_FOUND = "E_VERSION_NOT_FOUND"

    # 400
    E_INVALID_REQUEST = "E_INVALID_REQUEST"
    E_NAME_INVALID = "E_NAME_INVALID"
    E_TITLE_INVALID = "E_TITLE_INVALID"
    E_DEFAULT_SPACE_FORBIDDEN = "E_DEFAULT_SPACE_FORBIDDEN"

    # 500
    E_INTERNAL = "E_INTERNAL"
    E_STORAGE_ERROR = "E_STORAGE_ERROR"


_CODES_BY_STATUS: dict[int, tuple[ApiErrorCode, ...]] = {
    404: (
        ApiErrorCode.E_NOT_FOUND,
        ApiErrorCode.E_SPACE_NOT_FOUND,
        ApiErrorCode.E_ARTICLE_NOT_FOUND,
        ApiErrorCode.E_VERSION_NOT_FOUND,
    ),
    400: (
        ApiErrorCode.E_INVALID_REQUEST,
        ApiErrorCode.E_NAME_INVALID,
        ApiErrorCode.E_TITLE_INVALID,
        ApiErrorCode.E_DEFAULT_SPACE_FORBIDDEN,
    ),
    500: (
        ApiErrorCode.E_INTERNAL,
        ApiErrorCode.E_STORAGE_ERROR,
    ),
}

ERROR_CODE_TO_STATUS: dict[ApiErrorCode, int] = {
    code: status for status, codes in _CODES_BY_STATUS.items() for code in codes
}


class ApiError(Exception):
    """An error with a stable code and a message that is safe to show clients.

    Attributes:
        code: The error code enum value
        message: Human-readable error message
        status_code: HTTP status code (derived from code)
    """

    def __init__(self, code: ApiErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = ERROR_CODE_TO_STATUS.get(code, 500)


class NotFoundError(ApiError):
    def __init__(self, code: ApiErrorCode = ApiErrorCode.E_NOT_FOUND, message: str = "Not found"):
        super().__init__(code, message)


class InvalidRequestError(ApiError):
    def __init__(
        self, code: ApiErrorCode = ApiErrorCode.E_INVALID_REQUEST, message: str = "Invalid request"
    ):
        super().__init__(code, message)


class SpaceNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__(ApiErrorCode.E_SPACE_NOT_FOUND, "Space not found")


class ArticleNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__(ApiErrorCode.E_ARTICLE_NOT_FOUND, "Article not found")


class VersionNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__(ApiErrorCode.E_VERSION_NOT_FOUND, "Version not found")
