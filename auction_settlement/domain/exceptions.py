"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class PersistenceError(DomainException):
    """Auction or payment repository failed to persist a change"""

    pass


class NotificationError(DomainException):
    """Notification channel could not deliver an auction event"""

    pass


class EvaluationError(DomainException):
    """Auction has no bids, so there is no winner to evaluate"""

    pass
