"""
Custom exceptions for the TSP-GA engine.
Provides specific exception classes for configuration, instance and tour errors.
"""


class TSPGAException(Exception):
    """Base exception for TSP-GA engine."""

    def __init__(self, message: str = "", details: dict = None):
        """
        Initialize TSP-GA exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidConfigurationError(TSPGAException):
    """Raised when configuration parameters are invalid."""

    def __init__(self, parameter: str = None, value=None,
                 expected: str = None):
        """
        Initialize invalid configuration error.

        Args:
            parameter: Parameter name
            value: Invalid value
            expected: Expected value or range
        """
        message = "Invalid configuration parameter"
        details = {}

        if parameter:
            details['parameter'] = parameter
        if value is not None:
            details['value'] = value
        if expected:
            details['expected'] = expected

        if parameter:
            message += f": {parameter} = {value}"
            if expected:
                message += f" (expected: {expected})"

        super().__init__(message, details)


class DegenerateInstanceError(TSPGAException):
    """Raised when an instance is too small for selection and crossover to mean anything."""

    def __init__(self, size: int = None, minimum: int = 2):
        message = "Degenerate TSP instance"
        details = {'minimum': minimum}
        if size is not None:
            details['size'] = size
            message += f": {size} point(s), at least {minimum} required"
        super().__init__(message, details)


class InvalidTourError(TSPGAException):
    """Raised when a tour is not a permutation of the instance's point indices."""

    def __init__(self, tour: list = None, reason: str = None):
        """
        Initialize invalid tour error.

        Args:
            tour: Offending tour
            reason: Reason for failure
        """
        message = "Tour is not a valid permutation"
        details = {}

        if tour is not None:
            details['tour_length'] = len(tour)
        if reason:
            details['reason'] = reason
            message += f": {reason}"

        super().__init__(message, details)


class EmptyPopulationError(TSPGAException):
    """Raised when an operation needs at least one individual."""

    def __init__(self, operation: str = None):
        message = "Population is empty"
        if operation:
            message += f" (during {operation})"
        super().__init__(message, {'operation': operation} if operation else None)


class RunStateError(TSPGAException):
    """Raised when a GA run is asked to do something its current state forbids."""

    def __init__(self, state: str = None, operation: str = None):
        message = "Invalid run state"
        details = {}
        if state:
            details['state'] = state
            message += f": run is {state}"
        if operation:
            details['operation'] = operation
            message += f", cannot {operation}"
        super().__init__(message, details)
