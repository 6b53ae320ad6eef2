from mapcache.infrastructure.cache.mapper_cache import MapperCache

__all__ = ["MapperCache"]
