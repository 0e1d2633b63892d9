"""Custom exceptions for Mates Split."""


class MatesSplitError(Exception):
    """Base exception for all Mates Split errors."""

    pass


class ConfigurationError(MatesSplitError):
    """Raised when configuration is invalid or missing."""

    pass


class StoreError(MatesSplitError):
    """Raised when the expense store cannot read or write household data."""

    pass


class InvalidRoommateError(MatesSplitError):
    """Raised when a roommate name is empty."""

    pass


class DuplicateRoommateError(MatesSplitError):
    """Raised when adding a roommate whose name is already on the roster."""

    def __init__(self, name: str, message: str | None = None):
        self.name = name
        super().__init__(message or f"Roommate '{name}' already exists")


class RoommateNotFoundError(MatesSplitError):
    """Raised when removing a roommate who is not on the roster."""

    def __init__(self, name: str, message: str | None = None):
        self.name = name
        super().__init__(message or f"Roommate '{name}' is not on the roster")


class InvalidExpenseError(MatesSplitError):
    """Raised when a new expense is missing required information."""

    pass


class ExpenseNotFoundError(MatesSplitError):
    """Raised when deleting an expense id that does not exist."""

    def __init__(self, expense_id: str, message: str | None = None):
        self.expense_id = expense_id
        super().__init__(message or f"Could not find expense {expense_id}")


class InvalidCategoryError(MatesSplitError):
    """Raised when a category name is empty."""

    pass


class DuplicateCategoryError(MatesSplitError):
    """Raised when adding a category that already exists."""

    def __init__(self, name: str, message: str | None = None):
        self.name = name
        super().__init__(message or f"Category '{name}' already exists")
