"""Stable field keys, choice sets and defaults shared across the task configurator."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class FieldKey(StrEnum):
    """Persistence keys of the publish task configuration."""

    APPLICATION_NAME = "applicationName"
    PACKAGE_NAME = "packageName"
    JSON_KEY_PATH = "jsonKeyPath"
    JSON_KEY_CONTENT = "jsonKeyContent"
    FIND_JSON_KEY_IN_FILE = "findJsonKeyInFile"
    APK_PATH = "apkPath"
    DEOBFUSCATION_FILE_PATH = "deobfuscationFilePath"
    RECENT_CHANGES_LISTINGS = "recentChangesListings"
    TRACK = "track"
    ROLLOUT_FRACTION = "rolloutFraction"


class TrackChoice(StrEnum):
    """Google Play release tracks offered by the track selector."""

    NONE = "none"
    INTERNAL = "internal"
    ALPHA = "alpha"
    BETA = "beta"
    PRODUCTION = "production"
    ROLLOUT = "rollout"


# Persisted keys, in form order.
FIELD_KEYS: Final[tuple[FieldKey, ...]] = tuple(FieldKey)

# Context-only keys holding selector choices. Never persisted.
TRACK_TYPES: Final[str] = "trackTypes"
ROLLOUT_FRACTIONS: Final[str] = "rolloutFractions"

TRACK_CHOICES: Final[tuple[str, ...]] = tuple(choice.value for choice in TrackChoice)
DEFAULT_TRACK: Final[str] = TrackChoice.INTERNAL.value

# Play accepts 0.05, 0.1, 0.2 and 0.5 for staged rollouts.
ROLLOUT_FRACTION_CHOICES: Final[tuple[str, ...]] = ("0.05", "0.1", "0.2", "0.5")
DEFAULT_ROLLOUT_FRACTION: Final[str] = "0.1"

DEFAULT_FIND_JSON_KEY_IN_FILE: Final[bool] = False

APK_SUFFIX: Final[str] = ".apk"

REQUIRED_FIELD_MESSAGE: Final[str] = "This field can't be empty"
APK_FORMAT_MESSAGE: Final[str] = "Should be path to *.apk file"

__all__ = [
    "APK_FORMAT_MESSAGE",
    "APK_SUFFIX",
    "DEFAULT_FIND_JSON_KEY_IN_FILE",
    "DEFAULT_ROLLOUT_FRACTION",
    "DEFAULT_TRACK",
    "FIELD_KEYS",
    "REQUIRED_FIELD_MESSAGE",
    "ROLLOUT_FRACTIONS",
    "ROLLOUT_FRACTION_CHOICES",
    "TRACK_CHOICES",
    "TRACK_TYPES",
    "FieldKey",
    "TrackChoice",
]
