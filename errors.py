"""Exceptions raised by Centavo services."""


class CentavoError(Exception):
    """Base class for all application errors."""


class ValidationError(CentavoError):
    """Input rejected: bad amount, bad dates, duplicate name or limit."""


class ReferentialError(CentavoError):
    """Operation would leave other entities pointing at nothing."""


class NotFoundError(CentavoError):
    """Entity id does not exist for this user."""
