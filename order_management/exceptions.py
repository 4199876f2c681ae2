"""
Exceptions raised by the order lifecycle
"""


class OrderServiceError(Exception):
    """Base exception for order service errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(OrderServiceError):
    """Referenced order does not exist"""
    pass


class ValidationError(OrderServiceError):
    """Invalid input, invalid status transition or business rule violation"""
    pass


class CollaboratorError(OrderServiceError):
    """Unexpected failure from the customer, inventory or messaging services"""
    pass
