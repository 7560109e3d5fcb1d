"""Domain errors and failure typing."""


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class ContractError(PipelineError):
    """Raised when upstream or output contracts are broken. Always fatal."""

    error_code = "CONTRACT_ERROR"


class StageError(PipelineError):
    """Raised for failures that degrade to fewer results."""

    error_code = "STAGE_ERROR"


class DirectoryParseError(ContractError):
    """The location directory marker was not found in the page."""

    error_code = "DIRECTORY_PARSE_ERROR"


class DirectoryDecodeError(ContractError):
    """The directory block was found but is not valid record data."""

    error_code = "DIRECTORY_DECODE_ERROR"

    def __init__(self, message: str, raw_capture_path=None) -> None:
        super().__init__(message)
        self.raw_capture_path = raw_capture_path


class SchemaValidationError(ContractError):
    """A shift that survived the completeness filter broke the canonical shape."""

    error_code = "SCHEMA_VALIDATION_ERROR"

    def __init__(self, record_index: int, field: str, reason: str, record: dict) -> None:
        super().__init__(f"Shift #{record_index} field '{field}': {reason}")
        self.record_index = record_index
        self.field = field
        self.reason = reason
        self.record = record


class FieldResolutionError(StageError):
    """A single shift payload could not be resolved."""

    error_code = "FIELD_RESOLUTION_ERROR"
