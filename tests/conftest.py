"""Shared fixtures for swap-manager tests."""
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from swap_manager.orchestrator import RunOptions


SWAPS_TEMPLATE = """\
Filename\t\t\t\tType\t\tSize\t\tUsed\t\tPriority
/dev/sda2                               partition\t8388608\t\t2097152\t\t-2
"""

GIB = 1024**3


@pytest.fixture()
def swaps_content():
    return SWAPS_TEMPLATE


@pytest.fixture()
def tmp_swaps(tmp_path, swaps_content):
    p = tmp_path / "swaps"
    p.write_text(swaps_content)
    return str(p)


@pytest.fixture()
def tmp_fstab(tmp_path):
    p = tmp_path / "fstab"
    p.write_text("UUID=1234 / ext4 defaults 0 1\n")
    return str(p)


@pytest.fixture()
def options(tmp_path, tmp_fstab, tmp_swaps):
    return RunOptions(
        swapfile_path=str(tmp_path / "swap-manager.swap"),
        fstab_path=tmp_fstab,
        swaps_path=tmp_swaps,
    )


@pytest.fixture(autouse=True)
def fake_psutil():
    """Plenty of RAM and disk unless a test says otherwise."""
    with patch("swap_manager.orchestrator.psutil") as mock_psutil:
        mock_psutil.swap_memory.return_value = SimpleNamespace(used=0)
        mock_psutil.virtual_memory.return_value = SimpleNamespace(available=16 * GIB)
        mock_psutil.disk_usage.return_value = SimpleNamespace(free=100 * GIB)
        yield mock_psutil


@pytest.fixture()
def as_root():
    with patch("os.geteuid", return_value=0):
        yield


@pytest.fixture()
def mock_run():
    with patch("swap_manager.orchestrator.subprocess.run") as run:
        run.return_value = MagicMock(returncode=0, stderr="")
        yield run
