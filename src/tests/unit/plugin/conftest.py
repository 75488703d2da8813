"""Fixtures for plugin unit tests."""

from pathlib import Path

import pytest
from fakes import FakeImageTools

from filevol_plugin.config import VolumeConfig
from filevol_plugin.runtimes.loopfs.naming import VolumeNaming
from filevol_plugin.runtimes.loopfs.volume import VolumeManager


@pytest.fixture
def volume_dir(tmp_path: Path) -> Path:
    path = tmp_path / "images"
    path.mkdir()
    return path


@pytest.fixture
def mount_home(tmp_path: Path) -> Path:
    return tmp_path / "mnt"


@pytest.fixture
def volume_config(volume_dir: Path, mount_home: Path) -> VolumeConfig:
    """VolumeConfig pointing at temp directories."""
    return VolumeConfig(
        size="2048",
        path=str(volume_dir),
        fstype="ext4",
        mount_home=str(mount_home),
    )


@pytest.fixture
def naming(volume_config: VolumeConfig) -> VolumeNaming:
    return VolumeNaming.from_config(volume_config)


@pytest.fixture
def fake_tools() -> FakeImageTools:
    return FakeImageTools()


@pytest.fixture
def manager(
    volume_config: VolumeConfig,
    naming: VolumeNaming,
    fake_tools: FakeImageTools,
) -> VolumeManager:
    """VolumeManager wired to the recording fake."""
    return VolumeManager(
        volume_config,
        naming,
        allocator=fake_tools,
        formatter=fake_tools,
        mounter=fake_tools,
    )
