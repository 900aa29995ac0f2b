"""Errors raised while building a likes log.

Everything a run can fail with derives from :class:`LikesLogError`, except
:class:`UnknownSchemaError`, which signals a bug rather than bad data.
"""


class LikesLogError(Exception):
    """Base class for failures of a likes log run."""


class RequestFailedError(LikesLogError):
    """The platform answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, url: str):
        self.status_code = status_code
        self.reason = reason
        self.url = url
        super().__init__(f"{status_code} {reason} {url}")


class ResponseDecodeError(LikesLogError):
    """A response body could not be decoded as JSON."""


class ValidationError(LikesLogError):
    """A payload does not conform to its schema.

    The message joins all violations in the order they were reported.
    """

    def __init__(self, schema_id: str, errors: list[str]):
        self.schema_id = schema_id
        self.errors = errors
        super().__init__(", ".join(errors))


class ResolutionError(LikesLogError):
    """An artifact (client id, user id, track) could not be found."""


class AllAttemptsFailedError(LikesLogError):
    def __init__(self, message: str, errors: list[BaseException]):
        self.errors = errors
        super().__init__(message)


class UnknownSchemaError(RuntimeError):
    """No compiled validator exists for a schema id."""
