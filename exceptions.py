class ContactError(Exception):
    """Base error for the contact endpoint.

    `message` is the fixed text returned to the client. Anything more
    specific belongs in the server log, never in the response.
    """

    status_code = 500
    message = "Internal Server Error"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail


class ValidationError(ContactError):
    status_code = 400
    message = "Missing required fields"


class ConfigurationError(ContactError):
    status_code = 500
    message = "Server configuration error. Please contact support."


class DeliveryError(ContactError):
    status_code = 500
    message = "Failed to send email. Please try again later."


class RecordsError(DeliveryError):
    message = "Failed to update records. Please try again later."


class RateLimitError(ContactError):
    status_code = 429
    message = "Too many requests from this IP, please try again after an hour"
