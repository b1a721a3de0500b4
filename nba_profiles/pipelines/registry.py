"""Registry for recompute pipelines."""

from nba_profiles.pipelines.base import BasePipeline

# Registry of pipeline classes
_PIPELINE_REGISTRY: dict[str, type[BasePipeline]] = {}


def register_pipeline(cls: type[BasePipeline]) -> type[BasePipeline]:
    """
    Register a pipeline class.

    This is intended to be used as a decorator.

    Args:
        cls: Pipeline class to register.

    Returns:
        The same class (for decorator chaining).

    Example:
        @register_pipeline
        class ReferencePipeline(BasePipeline):
            name = "reference"
            ...
    """
    if not hasattr(cls, "name"):
        raise ValueError(f"Pipeline class {cls.__name__} must define 'name'")

    _PIPELINE_REGISTRY[cls.name] = cls
    return cls


def get_pipeline(name: str) -> type[BasePipeline] | None:
    """
    Get a pipeline class by name.

    Args:
        name: Pipeline name (e.g., "reference", "profile").

    Returns:
        Pipeline class if found, None otherwise.
    """
    return _PIPELINE_REGISTRY.get(name)


def list_pipelines() -> list[str]:
    """
    List all registered pipeline names.

    Returns:
        List of pipeline names.
    """
    return list(_PIPELINE_REGISTRY.keys())


def create_pipeline(name: str, **kwargs) -> BasePipeline | None:
    """
    Create a pipeline instance by name.

    Args:
        name: Pipeline name.
        **kwargs: Arguments to pass to pipeline constructor.

    Returns:
        Pipeline instance if found, None otherwise.
    """
    pipeline_class = get_pipeline(name)
    if pipeline_class is None:
        return None
    return pipeline_class(**kwargs)
