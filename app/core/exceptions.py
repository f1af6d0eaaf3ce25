"""
Custom Exceptions for the Hostel Ledger Service

This module defines the exception classes raised by repositories and
services. Every exception carries an error code and an HTTP status so the
request boundary can turn it into a response without further mapping.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Business logic errors
    INSUFFICIENT_CAPACITY = "INSUFFICIENT_CAPACITY"
    ROOM_UNAVAILABLE = "ROOM_UNAVAILABLE"
    DUPLICATE_BILL = "DUPLICATE_BILL"

    # Resource specific errors
    USER_NOT_FOUND = "USER_NOT_FOUND"
    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ALLOCATION_NOT_FOUND = "ALLOCATION_NOT_FOUND"
    BILL_NOT_FOUND = "BILL_NOT_FOUND"
    FEE_STRUCTURE_NOT_FOUND = "FEE_STRUCTURE_NOT_FOUND"
    COMPLAINT_NOT_FOUND = "COMPLAINT_NOT_FOUND"
    STAFF_NOT_FOUND = "STAFF_NOT_FOUND"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when request data fails a business validation"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 400
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)


class ConflictError(BaseAppException):
    """Exception raised when an operation conflicts with current state"""

    def __init__(
        self,
        message: str = "Operation conflicts with current state",
        error_code: ErrorCode = ErrorCode.CONFLICT,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 409)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, error_code, details, 404)


# ========================================
# Resource Not Found Exceptions
# ========================================

class UserNotFoundError(ResourceNotFoundError):
    """Exception raised when a user is not found"""

    def __init__(self, user_id: Optional[str] = None):
        super().__init__("User", user_id, error_code=ErrorCode.USER_NOT_FOUND)


class StudentNotFoundError(ResourceNotFoundError):
    """Exception raised when a student is not found"""

    def __init__(self, student_id: Optional[str] = None):
        super().__init__("Student", student_id, error_code=ErrorCode.STUDENT_NOT_FOUND)


class RoomNotFoundError(ResourceNotFoundError):
    """Exception raised when a room is not found"""

    def __init__(self, room_id: Optional[str] = None):
        super().__init__("Room", room_id, error_code=ErrorCode.ROOM_NOT_FOUND)


class AllocationNotFoundError(ResourceNotFoundError):
    """Exception raised when an allocation is not found"""

    def __init__(self, allocation_id: Optional[str] = None):
        super().__init__("Allocation", allocation_id, error_code=ErrorCode.ALLOCATION_NOT_FOUND)


class BillNotFoundError(ResourceNotFoundError):
    """Exception raised when a bill is not found"""

    def __init__(self, bill_id: Optional[str] = None):
        super().__init__("Bill", bill_id, error_code=ErrorCode.BILL_NOT_FOUND)


class FeeStructureNotFoundError(ResourceNotFoundError):
    """Exception raised when an active fee structure is not found"""

    def __init__(self, fee_structure_id: Optional[str] = None):
        super().__init__(
            "Fee structure", fee_structure_id, error_code=ErrorCode.FEE_STRUCTURE_NOT_FOUND
        )


class ComplaintNotFoundError(ResourceNotFoundError):
    """Exception raised when a complaint is not found"""

    def __init__(self, complaint_id: Optional[str] = None):
        super().__init__("Complaint", complaint_id, error_code=ErrorCode.COMPLAINT_NOT_FOUND)


class StaffNotFoundError(ResourceNotFoundError):
    """Exception raised when a staff member is not found"""

    def __init__(self, staff_id: Optional[str] = None):
        super().__init__("Staff", staff_id, error_code=ErrorCode.STAFF_NOT_FOUND)


# ========================================
# Authentication & Authorization Exceptions
# ========================================

class AuthenticationError(BaseAppException):
    """Exception raised when authentication fails"""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 401)


class AuthorizationError(BaseAppException):
    """Exception raised when a role or ownership check fails"""

    def __init__(
        self,
        message: str = "Access denied",
        required_roles: Optional[List[str]] = None,
        error_code: ErrorCode = ErrorCode.AUTHORIZATION_FAILED
    ):
        details = {"required_roles": required_roles} if required_roles else {}
        super().__init__(message, error_code, details, 403)


class TokenExpiredError(AuthenticationError):
    """Exception raised when a token has expired"""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, ErrorCode.TOKEN_EXPIRED)


class InvalidTokenError(AuthenticationError):
    """Exception raised when token is invalid"""

    def __init__(self, message: str = "Invalid token", reason: Optional[str] = None):
        details = {"reason": reason} if reason else {}
        super().__init__(message, ErrorCode.TOKEN_INVALID, details)


# ========================================
# Database Exceptions
# ========================================

class DatabaseError(BaseAppException):
    """Exception raised when database operations fail"""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        status_code: int = 500
    ):
        details = {
            "operation": operation,
            "table": table
        }
        super().__init__(message, error_code, details, status_code)


class DuplicateEntryError(DatabaseError):
    """Exception raised when a unique constraint rejects a write"""

    def __init__(
        self,
        message: str = "Duplicate entry",
        table: Optional[str] = None
    ):
        super().__init__(
            message,
            operation="insert",
            table=table,
            error_code=ErrorCode.DUPLICATE_ENTRY,
            status_code=409
        )


# ========================================
# Business Logic Exceptions
# ========================================

class RoomCapacityExceededError(ConflictError):
    """Exception raised when an allocation would take a room past its capacity"""

    def __init__(
        self,
        room_id: str,
        capacity: int,
        active_count: int
    ):
        super().__init__(
            f"Room is full ({active_count}/{capacity} beds taken)",
            ErrorCode.INSUFFICIENT_CAPACITY,
            {"room_id": room_id, "capacity": capacity, "active_count": active_count}
        )


class RoomUnderMaintenanceError(ConflictError):
    """Exception raised when allocating into a room flagged for maintenance"""

    def __init__(self, room_id: str):
        super().__init__(
            "Room is under maintenance",
            ErrorCode.ROOM_UNAVAILABLE,
            {"room_id": room_id}
        )


class DuplicateBillError(ConflictError):
    """Exception raised when a bill already exists for the student and month"""

    def __init__(self, student_id: str, month_year: str):
        super().__init__(
            "Bill already exists for this month",
            ErrorCode.DUPLICATE_BILL,
            {"student_id": student_id, "month_year": month_year}
        )


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'ValidationError',
    'ConflictError',
    'ResourceNotFoundError',
    'UserNotFoundError',
    'StudentNotFoundError',
    'RoomNotFoundError',
    'AllocationNotFoundError',
    'BillNotFoundError',
    'FeeStructureNotFoundError',
    'ComplaintNotFoundError',
    'StaffNotFoundError',
    'AuthenticationError',
    'AuthorizationError',
    'TokenExpiredError',
    'InvalidTokenError',
    'DatabaseError',
    'DuplicateEntryError',
    'RoomCapacityExceededError',
    'RoomUnderMaintenanceError',
    'DuplicateBillError',
]
