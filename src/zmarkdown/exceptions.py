#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/exceptions.py
"""Custom exceptions for the zmarkdown library.

This module defines the exception classes raised while building renderers
and while rendering documents.

Exception Hierarchy
-------------------
- ZmarkdownError (base exception)

  - ValidationError (parameter/option validation)
    - ConfigurationError (missing or unusable configuration bundle)

  - PipelineError (inconsistent stage list)

  - ParsingError (tokenizer failures)

  - RenderingError (stage and output failures)
    - StageError (a pipeline stage raised)
    - WrapperConflictError (overlapping wrapper rules)
    - NetworkError (remote resources, e.g. image download)

Construction-time errors (``ConfigurationError``, ``PipelineError``) are raised
synchronously. Render-time errors are delivered through the renderer's
callback error slot or raised from the awaited result.

"""

from typing import Any


class ZmarkdownError(Exception):
    """Base exception class for all zmarkdown-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(ZmarkdownError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConfigurationError(ValidationError):
    """Exception raised when the configuration bundle is missing or unusable.

    Raised while a renderer is being constructed, never while rendering:
    a missing configuration half or a value that cannot be isolated is a
    programming error in the caller.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    parameter_name : str, optional
        Which half of the bundle is at fault ("tree_config" or "stringify_config")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, parameter_name: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, parameter_name=parameter_name, original_error=original_error)


class PipelineError(ZmarkdownError):
    """Exception raised when a stage list cannot be assembled."""


class ParsingError(ZmarkdownError):
    """Exception raised when the markdown source cannot be tokenized.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(ZmarkdownError):
    """Exception raised when a render invocation fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class StageError(RenderingError):
    """Exception raised when a pipeline stage fails.

    The whole invocation is aborted; no partial output is produced.

    Parameters
    ----------
    stage_name : str
        Name of the failing stage
    message : str, optional
        Custom error message. If not provided, one is derived from the original error
    original_error : Exception, optional
        The exception raised by the stage

    """

    def __init__(self, stage_name: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the stage error."""
        if message is None:
            detail = f": {original_error}" if original_error is not None else ""
            message = f"Stage '{stage_name}' failed{detail}"
        super().__init__(message, rendering_stage=stage_name, original_error=original_error)
        self.stage_name = stage_name


class WrapperConflictError(RenderingError):
    """Exception raised when more than one wrapper rule matches the same element.

    Parameters
    ----------
    target : str
        Tag name the conflicting rules are registered for
    rule_count : int
        Number of rules whose predicate matched

    """

    def __init__(self, target: str, rule_count: int):
        """Initialize the wrapper conflict error."""
        super().__init__(
            f"{rule_count} wrapper rules match the same <{target}> element; wrapper rules must be mutually exclusive",
            rendering_stage="wrappers",
        )
        self.target = target
        self.rule_count = rule_count


class NetworkError(RenderingError):
    """Exception raised when a remote resource cannot be fetched.

    Parameters
    ----------
    message : str
        Description of the network failure
    url : str, optional
        The URL that failed
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, url: str | None = None, original_error: Exception | None = None):
        """Initialize the network error."""
        super().__init__(message, rendering_stage="images_download", original_error=original_error)
        self.url = url
