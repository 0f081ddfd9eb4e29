# users/exceptions.py
"""
Custom exceptions for user management
"""

class UserServiceError(Exception):
    """Base exception for user service errors"""
    pass


class EmailAlreadyExistsError(UserServiceError):
    """Raised when attempting to create a user with an existing email"""
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email {email} is already registered")


class InvalidRoleError(UserServiceError):
    """Raised when a role outside admin/coordinator/psychologist/user is requested"""
    pass


class UserNotFoundError(UserServiceError):
    """Raised when the requested user does not exist"""
    pass
