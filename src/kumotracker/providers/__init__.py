"""Daily bar source registry."""

from __future__ import annotations

from kumotracker.config import DataSourceType
from kumotracker.providers.base import BaseBarSource

# Lazy registry: classes are imported on demand.
PROVIDER_CLASSES: dict[DataSourceType, str] = {
    DataSourceType.STOOQ: "kumotracker.providers.stooq.StooqSource",
    DataSourceType.POLYGON: "kumotracker.providers.polygon.PolygonSource",
    DataSourceType.MOCK: "kumotracker.providers.mock.MockSource",
}


def create_provider(
    provider_type: DataSourceType,
    **kwargs,
) -> BaseBarSource:
    """Instantiate a provider by type, forwarding kwargs to its constructor."""
    import importlib

    dotted = PROVIDER_CLASSES[provider_type]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseBarSource", "PROVIDER_CLASSES", "create_provider"]
