"""Domain-specific exceptions for recompute and publish operations."""


class PipelineError(Exception):
    """Base exception for pipeline failures."""

    pass


class SourceSchemaError(PipelineError):
    """Raised when the source relation is missing a required column or has the wrong type."""

    def __init__(self, source: str, problems: list[str]):
        self.source = source
        self.problems = problems
        super().__init__(f"Source '{source}' failed schema validation: {'; '.join(problems)}")


class StagingError(PipelineError):
    """Raised when materializing or validating a staged dataset fails."""

    pass


class PublishError(PipelineError):
    """Raised when the atomic replace of a published dataset fails."""

    pass


class CleanupError(PipelineError):
    """Raised when a staging artifact cannot be discarded after a publish."""

    pass
