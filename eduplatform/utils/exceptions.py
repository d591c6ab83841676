class EduPlatformException(Exception):
    """Base exception for the learning platform service"""

    def __init__(self, message: str = "Service error"):
        self.message = message
        super().__init__(self.message)


class BadRequestException(EduPlatformException):
    """Exception for Bad Request (400)"""

    def __init__(self, message: str = "Bad Request"):
        super().__init__(message)


class ResourceNotFoundException(EduPlatformException):
    """Exception for Not Found (404)"""

    def __init__(self, message: str = "Resource Not Found"):
        super().__init__(message)


class AccessDeniedException(EduPlatformException):
    """Exception for Forbidden (403)"""

    def __init__(self, message: str = "Access Denied"):
        super().__init__(message)


class UnauthorizedException(EduPlatformException):
    """Exception for Unauthorized (401)"""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ConflictException(EduPlatformException):
    """Exception for Conflict (409), e.g. a duplicate enrollment"""

    def __init__(self, message: str = "Conflict"):
        super().__init__(message)
