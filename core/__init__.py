from .errors import StartupError, StorageError
from .models import Item, Topic
from .validation import FieldKind, validate, parse_confirmation
from .progress import ProgressCommand, increase, decrease, finish_once, apply_command
from .form import FormController, FormField, FormValues, SubmitOutcome, SubmitResult
from .navigation import (
    Block,
    InputEvent,
    InteractionState,
    Key,
    ListView,
    Modal,
    Tab,
    reconcile,
    transition,
)

__all__ = [
    # Errors
    "StorageError",
    "StartupError",
    # Records
    "Topic",
    "Item",
    # Validation / form
    "FieldKind",
    "validate",
    "parse_confirmation",
    "FormController",
    "FormField",
    "FormValues",
    "SubmitOutcome",
    "SubmitResult",
    # Progress engine
    "ProgressCommand",
    "increase",
    "decrease",
    "finish_once",
    "apply_command",
    # Navigation
    "Tab",
    "Block",
    "Modal",
    "Key",
    "InputEvent",
    "InteractionState",
    "ListView",
    "transition",
    "reconcile",
]
