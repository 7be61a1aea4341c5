"""Exception hierarchy for the partialmask plumbing.

The masking engine itself never raises: out-of-range bounds are clamped,
``force(None)`` is normalized and duplicate change events are ignored. The
exceptions below cover the surrounding layers instead: configuration files,
mask glyph validation, missing timer services and adapters that do not fit
the expected interface.
"""

from typing import Any, Dict, List, Optional, Union


class PartialMaskError(Exception):
    """Base exception for all partialmask errors.

    Each subclass names its own ``default_code`` and ``default_component``;
    both can be overridden per instance.

    Attributes:
        message: What went wrong, ready to show to a developer
        error_code: Stable identifier such as ``"ADAPTER_ERROR"``
        context: Offending values (field name, file, missing members)
        recovery_suggestions: Hints on how to fix the call or the file
        component: Layer that raised: core, validation, config or adapter
    """

    default_code = "PARTIALMASK_ERROR"
    default_component = "core"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        component: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.context = dict(context or {})
        self.recovery_suggestions = list(recovery_suggestions or [])
        self.component = component or self.default_component

    def add_context(self, key: str, value: Any) -> None:
        self.context[key] = value

    def add_recovery_suggestion(self, suggestion: str) -> None:
        """Append a hint unless the same hint is already listed."""
        if suggestion not in self.recovery_suggestions:
            self.recovery_suggestions.append(suggestion)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the error for structured log events."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "error_code": self.error_code,
            "component": self.component,
            "context": self.context,
            "recovery_suggestions": self.recovery_suggestions,
        }


class ValidationError(PartialMaskError):
    """Raised when a value handed to the library has the wrong shape."""

    default_code = "VALIDATION_ERROR"
    default_component = "validation"

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        expected_type: Optional[str] = None,
        actual_value: Optional[Any] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if field_name:
            self.add_context("field_name", field_name)
        if expected_type:
            self.add_context("expected_type", expected_type)
        if actual_value is not None:
            self.add_context("actual_value", str(actual_value))


class ConfigurationError(ValidationError):
    """Raised when a field configuration file is invalid or unreadable."""

    default_code = "CONFIGURATION_ERROR"
    default_component = "config"

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        config_section: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if config_file:
            self.add_context("config_file", config_file)
        if config_section:
            self.add_context("config_section", config_section)


class AdapterError(PartialMaskError):
    """Raised when an input adapter cannot be used by the engine."""

    default_code = "ADAPTER_ERROR"
    default_component = "adapter"

    def __init__(
        self,
        message: str,
        adapter_type: Optional[str] = None,
        missing_members: Optional[List[str]] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if adapter_type:
            self.add_context("adapter_type", adapter_type)
        if missing_members:
            self.add_context("missing_members", missing_members)


# Convenience functions for creating common exception scenarios

def create_validation_error(
    message: str,
    field_name: str,
    expected: Union[str, type],
    actual: Any,
) -> ValidationError:
    """Create a validation error with standard context."""
    expected_str = expected.__name__ if isinstance(expected, type) else str(expected)

    error = ValidationError(
        message=message,
        field_name=field_name,
        expected_type=expected_str,
        actual_value=actual,
    )

    error.add_recovery_suggestion(f"Ensure {field_name} is of type {expected_str}")
    return error


def create_adapter_error(
    adapter: Any,
    missing_members: List[str],
) -> AdapterError:
    """Create an adapter error listing the members the object lacks."""
    adapter_type = type(adapter).__name__
    error = AdapterError(
        message=f"{adapter_type} does not implement the InputAdapter interface",
        adapter_type=adapter_type,
        missing_members=missing_members,
    )
    error.add_recovery_suggestion(
        "Wrap the widget in TextFieldAdapter or QLineEditAdapter"
    )
    return error


def create_timer_service_error(timer_service: Any) -> ValidationError:
    """Create the error raised when an engine is built without a usable timer service."""
    error = create_validation_error(
        "timer_service must provide schedule_once() and cancel()",
        field_name="timer_service",
        expected="TimerService",
        actual=type(timer_service).__name__,
    )
    error.add_recovery_suggestion(
        "Pass AsyncioTimerService or QtTimerService so reveals expire in real time; "
        "ManualTimerService only fires when advance() is called"
    )
    return error
