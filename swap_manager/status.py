"""Show active swap areas from /proc/swaps with a human-readable total."""
from dataclasses import dataclass

from swap_manager.errors import FilesystemError
from swap_manager.sizes import human_readable_bytes

SWAPS_PATH = "/proc/swaps"


@dataclass(slots=True)
class SwapEntry:
    filename: str
    type: str
    size_kb: int
    used_kb: int
    priority: int
    line: str


def _int_or_zero(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def read_swaps(swaps_path: str = SWAPS_PATH) -> tuple[str, list[SwapEntry]]:
    """Parse /proc/swaps and return (header line, entries).

    Columns: Filename Type Size Used Priority, sizes in KiB. Lines with
    fewer than 5 fields are skipped; unparsable numbers count as 0.
    """
    try:
        with open(swaps_path) as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise FilesystemError(f"reading {swaps_path}: {e}") from e

    header = lines[0] if lines else ""
    entries = []
    for line in lines[1:]:
        parts = line.split()
        if len(parts) < 5:
            continue
        entries.append(
            SwapEntry(
                filename=parts[0],
                type=parts[1],
                size_kb=_int_or_zero(parts[2]),
                used_kb=_int_or_zero(parts[3]),
                priority=_int_or_zero(parts[4]),
                line=line,
            )
        )
    return header, entries


def show_swaps(swaps_path: str = SWAPS_PATH) -> None:
    header, entries = read_swaps(swaps_path)
    print(header)
    total_size = 0
    total_used = 0
    for entry in entries:
        total_size += entry.size_kb * 1024
        total_used += entry.used_kb * 1024
        print(entry.line)
    print(
        f"\nTotal: {human_readable_bytes(total_used)} used"
        f" / {human_readable_bytes(total_size)} total"
    )
