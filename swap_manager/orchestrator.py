"""Create, replace and cycle swap by driving swapoff/swapon/mkswap & co."""
import enum
import os
import subprocess
import sys
from dataclasses import dataclass

import psutil

from swap_manager.errors import CommandError, FilesystemError, PrivilegeError
from swap_manager.fstab import FSTAB_PATH, persist_swapfile
from swap_manager.sizes import human_readable_bytes, parse_size
from swap_manager.status import SWAPS_PATH

SWAPFILE_PATH = "/swap-manager.swap"
DD_BLOCK_BYTES = 1024 * 1024


class OnFailure(enum.Enum):
    ABORT = "abort"
    IGNORE = "ignore"


@dataclass(slots=True)
class RunOptions:
    verbose: bool = False
    dry_run: bool = False
    swapfile_path: str = SWAPFILE_PATH
    fstab_path: str = FSTAB_PATH
    swaps_path: str = SWAPS_PATH

    def log(self, msg: str) -> None:
        if self.verbose:
            print(msg)


def require_root() -> None:
    if os.geteuid() != 0:
        raise PrivilegeError("This operation requires root. Run with sudo or as root.")


def _run(cmd: list[str], on_failure: OnFailure, options: RunOptions) -> bool:
    """Run cmd unless dry_run. Return True on success.

    With OnFailure.ABORT a missing binary or non-zero exit raises
    CommandError; with OnFailure.IGNORE it returns False.
    """
    if options.dry_run:
        print(f"[dry-run] {' '.join(cmd)}")
        return True
    options.log(f"running: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        if on_failure is OnFailure.ABORT:
            raise CommandError(f"running {' '.join(cmd)}: {e}", cmd[0]) from e
        options.log(f"{cmd[0]} unavailable ({e}); continuing")
        return False

    if result.returncode == 0:
        return True
    if on_failure is OnFailure.ABORT:
        if result.stderr:
            print(result.stderr.strip(), file=sys.stderr)
        raise CommandError(
            f"{' '.join(cmd)} failed: exit {result.returncode}",
            cmd[0],
            result.returncode,
        )
    options.log(f"{cmd[0]} exited {result.returncode}; continuing")
    return False


def _warn_if_low_disk(path: str, size_bytes: int, options: RunOptions) -> None:
    directory = os.path.dirname(os.path.abspath(path))
    try:
        free = psutil.disk_usage(directory).free
    except OSError as e:
        options.log(f"Could not check free space on {directory}: {e}")
        return
    options.log(f"Free space on {directory}: {human_readable_bytes(free)}")
    if free < size_bytes:
        print(
            f"Warning: {directory} has {human_readable_bytes(free)} free,"
            f" less than the requested {human_readable_bytes(size_bytes)}.",
            file=sys.stderr,
        )


def _warn_if_low_ram(options: RunOptions) -> None:
    swap_used = psutil.swap_memory().used
    mem_available = psutil.virtual_memory().available
    options.log(f"SwapUsed:     {human_readable_bytes(swap_used)}")
    options.log(f"MemAvailable: {human_readable_bytes(mem_available)}")
    if swap_used > mem_available:
        print(
            "Warning: used swap exceeds available RAM; swapoff may fail"
            " or trigger the OOM killer.",
            file=sys.stderr,
        )


def _allocate(path: str, size_token: str, size_bytes: int, options: RunOptions) -> None:
    # fallocate understands the same K/M/G/T suffixes, so pass the token as given
    if _run(["fallocate", "-l", size_token, path], OnFailure.IGNORE, options):
        return
    count = (size_bytes + DD_BLOCK_BYTES - 1) // DD_BLOCK_BYTES
    print(f"fallocate unavailable or failed, falling back to dd ({count} MiB)...")
    _run(
        ["dd", "if=/dev/zero", f"of={path}", "bs=1M", f"count={count}"],
        OnFailure.ABORT,
        options,
    )


def set_swap(
    size_token: str,
    replace: bool = False,
    persist: bool = False,
    options: RunOptions | None = None,
) -> None:
    """Create and activate a swapfile of the requested size.

    Steps run in order and the first fatal failure raises; nothing already
    done is undone. Disabling a stale swapfile and chmod are best-effort.
    """
    options = options or RunOptions()
    require_root()
    path = options.swapfile_path
    print(f"Requested set {size_token} (replace={replace} persist={persist})")
    size_bytes = parse_size(size_token)

    if replace:
        print("Replacing existing swap (running swapoff -a)...")
        _run(["swapoff", "-a"], OnFailure.ABORT, options)

    if os.path.exists(path):
        print(f"Existing {path} found, disabling it first...")
        _run(["swapoff", path], OnFailure.IGNORE, options)
        if options.dry_run:
            print(f"[dry-run] rm {path}")
        else:
            try:
                os.remove(path)
            except OSError as e:
                raise FilesystemError(f"removing existing swapfile {path}: {e}") from e

    _warn_if_low_disk(path, size_bytes, options)
    _allocate(path, size_token, size_bytes, options)
    _run(["chmod", "600", path], OnFailure.IGNORE, options)
    _run(["mkswap", path], OnFailure.ABORT, options)
    _run(["swapon", path], OnFailure.ABORT, options)
    print(f"Activated swapfile {path} (size {human_readable_bytes(size_bytes)}).")

    if persist:
        print(f"Adding entry to {options.fstab_path} to make swap persistent...")
        persist_swapfile(
            path,
            fstab_path=options.fstab_path,
            verbose=options.verbose,
            dry_run=options.dry_run,
        )


def empty_swap(options: RunOptions | None = None) -> None:
    """Cycle swapoff -a / swapon -a to pull swapped pages back into RAM.

    If swapon -a fails the host is left without swap.
    """
    options = options or RunOptions()
    require_root()
    _warn_if_low_ram(options)
    print("Disabling all swap (this will move pages back into RAM)...")
    _run(["swapoff", "-a"], OnFailure.ABORT, options)
    print("Re-enabling swap (swapon -a)...")
    _run(["swapon", "-a"], OnFailure.ABORT, options)
    print("Swap emptied (swapoff -> swapon cycle completed).")
