QUOTA_FIELD = "resourceQuota"


class QuotaError(Exception):
    pass


class ParseError(QuotaError, ValueError):
    """A resource quantity that does not match the quantity grammar."""

    def __init__(self, text, key=None):
        self.text = text
        self.key = key
        if key is None:
            msg = f"Invalid quantity: {text!r}"
        else:
            msg = f"Invalid quantity for {key}: {text!r}"
        super().__init__(msg)


class AdmissionError(QuotaError):
    """Rejects an admission request.

    Carries the error kind and the API field the message is scoped to, so the
    caller can render it as a field-level error.
    """

    kind = "InvalidRequest"

    def __init__(self, message, field=None):
        self.message = message
        self.field = field
        super().__init__(message)

    def as_field_error(self):
        return self.field, self.message


class DependencyError(AdmissionError):
    kind = "DependencyFailure"


class NotFoundError(DependencyError):
    kind = "NotFound"


class QuotaExceededError(AdmissionError):
    kind = "MaxLimitExceeded"

    def __init__(self, detail):
        self.detail = detail
        super().__init__(
            f"Resource quota exceeds the project: {detail}", field=QUOTA_FIELD
        )
