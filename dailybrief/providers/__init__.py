"""Provider registry, connection probes and gateway."""

from dailybrief.providers.models import ModelDescriptor, ProbeResult, ProviderKind, ProviderRecord
from dailybrief.providers.catalog import ProviderTemplate, defaults
from dailybrief.providers.probes import ConnectionProber
from dailybrief.providers.registry import ProviderRegistry
from dailybrief.providers.gateway import ProviderGateway

__all__ = [
    "ConnectionProber",
    "ModelDescriptor",
    "ProbeResult",
    "ProviderGateway",
    "ProviderKind",
    "ProviderRecord",
    "ProviderRegistry",
    "ProviderTemplate",
    "defaults",
]
