class EmailSystemError(Exception):
    """Base exception for the email system."""

    pass


class ConfigurationError(EmailSystemError):
    """A trigger or send request references configuration that does not exist."""

    pass


class TemplateNotFoundError(ConfigurationError):
    """Raised when a template id does not resolve to a stored template."""

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Template not found: {template_id}")


class EmailGatewayError(EmailSystemError):
    """Raised when the mail provider rejects or fails a send."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class EmailLogWriteError(EmailSystemError):
    """Raised when an audit log entry could not be persisted."""

    pass
