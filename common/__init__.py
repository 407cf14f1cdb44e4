"""Core package for the expense tracker: models, API stub services and UI state."""

from .client import ExpenseApiClient
from .exceptions import ApiError, PersistenceError, RecordNotFoundError, ValidationError
from .form import FormController
from .models import Expense
from .services import ExpenseService
from .state import Draft, ExpenseState, Mode, StatusMessage
from .storage import JSONStorage
from .sync import CollectionSynchronizer

__all__ = [
    "ApiError",
    "CollectionSynchronizer",
    "Draft",
    "Expense",
    "ExpenseApiClient",
    "ExpenseService",
    "ExpenseState",
    "FormController",
    "JSONStorage",
    "Mode",
    "PersistenceError",
    "RecordNotFoundError",
    "StatusMessage",
    "ValidationError",
]
