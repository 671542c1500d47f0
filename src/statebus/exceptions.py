"""Custom exception hierarchy for statebus."""

from __future__ import annotations


class StateBusError(Exception):
    """Base exception for all statebus errors."""


class InvalidArgumentError(StateBusError, ValueError):
    """Wrong shape or type passed to a public operation.

    Covers non-string notifier names, non-callable reducers or listeners,
    and notifications that are not plain objects or lack a ``notifierName``.
    """


class DuplicateRegistrationError(StateBusError):
    """A notifier name was registered while already registered."""

    def __init__(self, notifier_name: str) -> None:
        self.notifier_name = notifier_name
        super().__init__(f"notifier_name must be unique to store; {notifier_name} already exists")


class ReentrancyViolationError(StateBusError, RuntimeError):
    """``dispatch`` was called while another dispatch was in progress.

    Raised when a reducer or a subscriber tries to generate a notification
    from inside the dispatch cycle it was invoked by.
    """
