"""Static registry of optional player features and their entry imports."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Sequence, Tuple

from .errors import UnknownFeatureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FeatureDescriptor:
    """One independently includable unit of player functionality."""

    key: str
    description: str
    required: bool = False
    source_refs: Tuple[str, ...] = ()


class FeatureRegistry:
    """Immutable, ordered mapping of feature key to descriptor."""

    def __init__(self, descriptors: Sequence[FeatureDescriptor]) -> None:
        entries: dict[str, FeatureDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.key in entries:
                raise ValueError(f"Feature '{descriptor.key}' already registered.")
            entries[descriptor.key] = descriptor
        self._entries: Mapping[str, FeatureDescriptor] = MappingProxyType(entries)

    def get(self, key: str) -> FeatureDescriptor:
        try:
            return self._entries[key]
        except KeyError as exc:
            raise UnknownFeatureError([key], self.keys()) from exc

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def required_keys(self) -> Tuple[str, ...]:
        return tuple(key for key, descriptor in self._entries.items() if descriptor.required)

    def core(self) -> FeatureDescriptor:
        """Return the required descriptor that provides the player itself."""

        required = self.required_keys()
        if len(required) != 1:
            raise ValueError(f"Registry must declare exactly one required feature (found {len(required)}).")
        return self._entries[required[0]]

    def ordered(self, keys: Iterable[str]) -> Tuple[FeatureDescriptor, ...]:
        """Return descriptors for ``keys`` in registry definition order."""

        wanted = set(keys)
        return tuple(descriptor for key, descriptor in self._entries.items() if key in wanted)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[FeatureDescriptor]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


CUSTOM_FEATURES = FeatureRegistry(
    [
        FeatureDescriptor(
            key="core",
            description="Core player functionality",
            required=True,
            source_refs=("./src/js/video.js",),
        ),
        FeatureDescriptor(
            key="hls",
            description="HLS streaming support",
            source_refs=("@videojs/http-streaming",),
        ),
        FeatureDescriptor(
            key="qualityLevels",
            description="Quality level selection",
            source_refs=("videojs-contrib-quality-levels",),
        ),
        FeatureDescriptor(
            key="vtt",
            description="WebVTT subtitle support",
            source_refs=("videojs-vtt.js",),
        ),
    ]
)

DEFAULT_FEATURES: Tuple[str, ...] = ("core", "hls", "qualityLevels", "vtt")


def parse_feature_list(value: Optional[str]) -> list[str]:
    """Split a comma-separated ``--features`` value, dropping blanks."""

    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def normalize_features(
    selected: Iterable[str],
    registry: FeatureRegistry = CUSTOM_FEATURES,
) -> frozenset[str]:
    """Validate ``selected`` and inject every required feature that is missing."""

    chosen = list(dict.fromkeys(selected))
    unknown = [key for key in chosen if key not in registry]
    if unknown:
        raise UnknownFeatureError(unknown, registry.keys())

    features = set(chosen)
    for key in registry.required_keys():
        if key not in features:
            features.add(key)
            logger.info("Automatically added required feature: %s", key)
    return frozenset(features)
