from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.fixture
def valid_values() -> dict[str, object]:
    return {
        "applicationName": "Acme Notes",
        "packageName": "com.acme.notes",
        "findJsonKeyInFile": False,
        "jsonKeyPath": "",
        "jsonKeyContent": '{"type": "service_account"}',
        "apkPath": "app/build/outputs/apk/release/app-release.apk",
        "deobfuscationFilePath": "app/build/outputs/mapping/release/mapping.txt",
        "recentChangesListings": "en-US:Bug fixes",
        "track": "internal",
        "rolloutFraction": "",
    }
