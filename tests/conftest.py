from __future__ import annotations

from collections.abc import Iterator

import pytest

from tacmap.environment.generators import GeneratedMap, generate_map
from tacmap.environment.map import MapConfig
from tacmap.util.performance import perf_tracker


@pytest.fixture(autouse=True)
def reset_performance_tracker() -> Iterator[None]:
    """Leave the global performance tracker disabled and empty around each test."""
    perf_tracker.disable()
    perf_tracker.reset()
    yield
    perf_tracker.disable()
    perf_tracker.reset()


@pytest.fixture(scope="session")
def scenario_config() -> MapConfig:
    """The reference configuration: NEXUS_ALPHA on a 2000x2000 map."""
    return MapConfig()


@pytest.fixture(scope="session")
def scenario_map(scenario_config: MapConfig) -> GeneratedMap:
    """The reference map, generated once per test session."""
    return generate_map(scenario_config)
