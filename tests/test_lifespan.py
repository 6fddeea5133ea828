from pathlib import Path

import pytest

from ipcountry import main
from ipcountry.config import settings
from ipcountry.errors import GeoDatabaseError
from tests.common import FakeCountryClient


@pytest.mark.asyncio
async def test_lifespan_installs_and_closes_client(monkeypatch: pytest.MonkeyPatch) -> None:
    client = FakeCountryClient({"8.8.8.8": "United States"})
    opened: list[Path] = []

    def _fake_load(db_path: Path) -> FakeCountryClient:
        opened.append(db_path)
        return client

    monkeypatch.setattr(main, "load_country_client", _fake_load)

    async with main.lifespan(main.app):
        assert main.app.state.country_client is client

    assert opened == [settings.geoip_db_path]
    assert client.closed is True
    assert main.app.state.country_client is None


@pytest.mark.asyncio
async def test_lifespan_fails_without_database(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """A missing database aborts startup instead of serving in a degraded mode."""
    monkeypatch.setattr(settings, "geoip_db_path", tmp_path / "missing.mmdb")

    with pytest.raises(GeoDatabaseError):
        async with main.lifespan(main.app):
            pass
