"""Custom exceptions for workflow dispatch."""


class WorkflowError(Exception):
    """Base exception for all workflow-related errors."""

    pass


class WorkflowNotFoundError(WorkflowError):
    """Raised when no workflow is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Workflow "{name}" not found')


class WorkflowInputError(WorkflowError):
    """Raised when a workflow payload is valid but cannot be acted on."""

    pass
