"""SDK exceptions."""

from __future__ import annotations

from http import HTTPStatus


class TypesenseError(RuntimeError):
    """Base class for errors raised by the Typesense client."""


class StatusError(TypesenseError):
    """The server answered with an error status code."""

    status_code = 0
    message = ""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class UnauthorizedError(StatusError):
    status_code = 401
    message = "401 unauthorized"


class NotFoundError(StatusError):
    status_code = 404
    message = "404 not found"


class AlreadyExistsError(StatusError):
    status_code = 409
    message = "409 resource already exists"


class UnprocessableError(StatusError):
    status_code = 422
    message = "422 unprocessable entity"


class UnavailableError(StatusError):
    status_code = 503
    message = "503 service unavailable"


class APIError(StatusError):
    """Any error status the client has no dedicated kind for."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        self.reason = _reason_phrase(status_code)
        super().__init__(f"{status_code} {self.reason}".rstrip())


class DecodeError(TypesenseError):
    """A response body could not be decoded into the expected shape.

    `document_id` is set when a document was read by id and only binding it
    to the output target failed.
    """

    document_id: str | None = None


class NotSequenceError(TypesenseError, TypeError):
    """Import was given something other than a sequence of documents."""


STATUS_ERRORS: dict[int, type[StatusError]] = {
    error.status_code: error
    for error in (
        UnauthorizedError,
        NotFoundError,
        AlreadyExistsError,
        UnprocessableError,
        UnavailableError,
    )
}


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""
