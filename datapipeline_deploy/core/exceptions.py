"""
Deploy Exception Classes

Typed exception hierarchy for the pipeline deploy protocol. Every error is
terminal for the current deploy attempt; callers handle them in one place.
"""

from typing import Any


class DeployError(Exception):
    """Base exception for all pipeline deploy errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.error_code:
            base_msg = f"[{self.error_code}] {base_msg}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg = f"{base_msg} (Context: {context_str})"
        return base_msg


class ConfigurationError(DeployError):
    """Raised when a required input (name, definition file, credentials) is missing."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        env_var: str | None = None,
    ) -> None:
        context = {}
        if field_name:
            context["field_name"] = field_name
        if env_var:
            context["env_var"] = env_var
        super().__init__(message, "CONFIGURATION_ERROR", context)

    def get_recovery_hint(self) -> str:
        """Provide a helpful hint for fixing the configuration."""
        field = self.context.get("field_name")
        env_var = self.context.get("env_var")
        if field and env_var:
            return f"Pass '{field}' explicitly or export {env_var}"
        if field:
            return f"Provide a value for '{field}'"
        return "Check the deploy configuration for missing values"


class AmbiguousNameError(DeployError):
    """Raised when more than one remote pipeline shares the target name."""

    def __init__(self, pipeline_name: str, pipeline_ids: list[str]) -> None:
        self.pipeline_name = pipeline_name
        self.pipeline_ids = list(pipeline_ids)
        super().__init__(
            f"Pipelines found '{pipeline_name}': {', '.join(self.pipeline_ids)}",
            "AMBIGUOUS_NAME",
            {"pipeline_name": pipeline_name, "match_count": len(self.pipeline_ids)},
        )

    def get_recovery_hint(self) -> str:
        """Provide a helpful hint for resolving the name clash."""
        return (
            f"Delete all but one pipeline named '{self.pipeline_name}' "
            "and run the deploy again"
        )


class MalformedDefinitionError(DeployError):
    """Raised when the source definition is missing a section or is mis-shaped."""

    def __init__(
        self,
        message: str,
        missing_sections: list[str] | None = None,
        source: str | None = None,
    ) -> None:
        self.missing_sections = list(missing_sections or [])
        context: dict[str, Any] = {}
        if self.missing_sections:
            context["missing_sections"] = ",".join(self.missing_sections)
        if source:
            context["source"] = source
        super().__init__(message, "MALFORMED_DEFINITION", context)

    def get_recovery_hint(self) -> str:
        """Provide a helpful hint for fixing the definition document."""
        if self.missing_sections:
            return (
                "Add the missing top-level section(s) "
                f"{', '.join(self.missing_sections)} to the definition file"
            )
        return "Check the definition file for missing ids or mis-shaped sections"


class RemoteOperationError(DeployError):
    """Raised when a gateway call fails at the transport or auth level."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        error_code: str | None = None,
        pipeline_id: str | None = None,
    ) -> None:
        self.operation = operation
        self.remote_error_code = error_code
        context = {}
        if operation:
            context["operation"] = operation
        if error_code:
            context["remote_error_code"] = error_code
        if pipeline_id:
            context["pipeline_id"] = pipeline_id
        super().__init__(message, "REMOTE_OPERATION_ERROR", context)


class ValidationFailure(DeployError):
    """Raised when the service accepts the upload but reports validation errors."""

    def __init__(
        self,
        message: str,
        pipeline_id: str,
        validation_errors: list[Any] | None = None,
    ) -> None:
        self.pipeline_id = pipeline_id
        self.validation_errors = list(validation_errors or [])
        super().__init__(
            message,
            "VALIDATION_FAILURE",
            {"pipeline_id": pipeline_id, "error_count": len(self.validation_errors)},
        )
