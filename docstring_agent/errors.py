"""Exceptions raised across the docstring agent boundary."""

from __future__ import annotations

from typing import Any


class DocstringAgentError(Exception):
    """Base exception for all docstring agent errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class GenerationError(DocstringAgentError):
    """The documentation generator could not produce text."""

    pass


class EditApplyError(DocstringAgentError):
    """The buffer rejected an atomic multi-edit application."""

    pass


class WorkflowBusyError(DocstringAgentError):
    """A generate-and-insert workflow is already running against the buffer."""

    pass


class ConfigurationError(DocstringAgentError):
    """Error in configuration."""

    pass
