import pytest

from mapcache.application.map_cache import MapCache
from mapcache.application.plan_builder import MappingPlanBuilder
from mapcache.config import get_settings
from mapcache.infrastructure.cache.mapper_cache import MapperCache
from mapcache.infrastructure.executor.attribute_executor import AttributeMappingExecutor
from mapcache.infrastructure.observability.logger import configure_logging
from mapcache.infrastructure.observability.metrics import MetricsCollector

configure_logging(log_level="WARNING")


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def metrics():
    return MetricsCollector(enabled=True)


@pytest.fixture
def mapper_cache(metrics):
    return MapperCache(
        builder=MappingPlanBuilder(),
        executor=AttributeMappingExecutor(),
        metrics=metrics,
    )


@pytest.fixture
def map_cache(mapper_cache):
    return MapCache(cache=mapper_cache)
