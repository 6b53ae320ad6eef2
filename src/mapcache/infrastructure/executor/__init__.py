from mapcache.infrastructure.executor.attribute_executor import (
    AttributeMappingExecutor,
    CompiledMapper,
)

__all__ = ["AttributeMappingExecutor", "CompiledMapper"]
