import sys
from pathlib import Path

import pytest

# Ensure local source package (src/typed_rest) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from typed_rest import RestServiceSettings  # noqa: E402
from typed_rest._utils.constants import (  # noqa: E402
    ENV_BASE_ADDRESS,
    ENV_BEARER_TOKEN,
    ENV_FACTORY_NAME,
    ENV_PASSWORD,
    ENV_USERNAME,
)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    for name in (
        ENV_BASE_ADDRESS,
        ENV_BEARER_TOKEN,
        ENV_FACTORY_NAME,
        ENV_PASSWORD,
        ENV_USERNAME,
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_url() -> str:
    return "http://mypc/webapi/"


@pytest.fixture
def settings(base_url: str) -> RestServiceSettings:
    return RestServiceSettings(base_address=base_url)
