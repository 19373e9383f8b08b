"""
Domain Exceptions for Physiotherapy Documentation

This module defines all custom exceptions raised by the documentation
assistant. Every exception carries a human-readable message plus a context
dictionary, so callers can either show the message to the clinician or log
the structured context.

Exception Hierarchy:
    PhysioDocumentationError (base)
    ├── ConfigurationError       → Invalid configuration
    ├── PatientValidationError   → Bad input at patient registration
    ├── SessionValidationError   → Bad input when editing a session
    ├── PreconditionError        → Operation invoked without patient/session
    ├── NotFoundError
    │   ├── PatientNotFoundError
    │   └── SessionNotFoundError
    └── RepositoryError
        ├── DatasetLoadError     → ICD-10 catalog could not be read
        └── PersistenceError     → Patient list could not be read/written

Usage:
    from physio_documentation.core.exceptions import PatientValidationError

    try:
        workspace.register_patient(name="")
    except PatientValidationError as e:
        show_warning(e.message)
"""

from typing import Optional


# =============================================================================
# STAGE 1: BASE EXCEPTION
# =============================================================================


class PhysioDocumentationError(Exception):
    """
    Base exception for all documentation assistant errors.

    Attributes:
        message: Human-readable error description
        context: Dictionary of additional context for debugging
    """

    def __init__(self, message: str, context: Optional[dict] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format message with context for display."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{context_str}]"
        return self.message


# =============================================================================
# STAGE 2: CONFIGURATION ERRORS
# =============================================================================


class ConfigurationError(PhysioDocumentationError):
    """
    Error in assistant configuration.

    When raised:
        - Unknown note language
        - Search limit or default rating out of range
        - Unknown log level
    """

    pass


# =============================================================================
# STAGE 3: INPUT VALIDATION ERRORS
# =============================================================================
# Raised at the point of the offending action, before any state is mutated.


class PatientValidationError(PhysioDocumentationError):
    """
    Patient registration input is invalid.

    When raised:
        - Empty or whitespace-only patient name
        - Missing diagnosis entry while a diagnosis is required

    Attributes:
        field_name: The offending input field
    """

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(message, context={"field": field_name})


class SessionValidationError(PhysioDocumentationError):
    """
    Session edit input is invalid (unknown type, rating off the 0-10 scale).

    Attributes:
        field_name: The offending session field
        value: The rejected value
    """

    def __init__(self, field_name: str, value, message: Optional[str] = None):
        self.field_name = field_name
        self.value = value
        super().__init__(
            message or f"Invalid value for session field '{field_name}': {value!r}",
            context={"field": field_name, "value": value},
        )


class PreconditionError(PhysioDocumentationError):
    """
    An operation was invoked without the patient/session it needs.

    When raised:
        - Composing a note with no patient or no session
        - Composing a note for a session that does not belong to the patient
        - Generating a note with nothing selected in the workspace
    """

    pass


# =============================================================================
# STAGE 4: LOOKUP ERRORS
# =============================================================================


class NotFoundError(PhysioDocumentationError):
    """Base class for unknown patient/session identifiers."""

    pass


class PatientNotFoundError(NotFoundError):
    """No patient with the given identifier exists in the workspace."""

    def __init__(self, patient_id: str):
        self.patient_id = patient_id
        super().__init__(f"Patient not found: {patient_id}", context={"patient_id": patient_id})


class SessionNotFoundError(NotFoundError):
    """No session with the given identifier exists for the patient."""

    def __init__(self, session_id: str, patient_id: Optional[str] = None):
        self.session_id = session_id
        self.patient_id = patient_id
        super().__init__(
            f"Session not found: {session_id}",
            context={"session_id": session_id, "patient_id": patient_id},
        )


# =============================================================================
# STAGE 5: REPOSITORY ERRORS
# =============================================================================


class RepositoryError(PhysioDocumentationError):
    """
    Error accessing a data repository (catalog file or patient store).
    """

    pass


class DatasetLoadError(RepositoryError):
    """
    Error loading the ICD-10 catalog.

    When raised:
        - File not found
        - Invalid JSON format
        - Permission denied

    Attributes:
        file_path: Path to the catalog file
        reason: Why loading failed
    """

    def __init__(self, file_path: str, reason: str):
        self.file_path = file_path
        self.reason = reason
        super().__init__(
            f"Failed to load dataset from {file_path}: {reason}",
            context={"file_path": file_path, "reason": reason},
        )


class PersistenceError(RepositoryError):
    """
    The patient list could not be read from or written to storage.

    The workspace recovers from this locally: in-memory state stays
    authoritative and the clinician is told the change may not survive
    a reload.

    Attributes:
        location: Storage location (file path or store name)
        operation: "load" or "save"
    """

    def __init__(self, location: str, operation: str, reason: str):
        self.location = location
        self.operation = operation
        self.reason = reason
        super().__init__(
            f"Failed to {operation} patient list at {location}: {reason}",
            context={"location": location, "operation": operation},
        )
