"""Record the swapfile in /etc/fstab so it is activated at boot."""
from swap_manager.errors import FilesystemError

FSTAB_PATH = "/etc/fstab"


def fstab_line(path: str) -> str:
    return f"{path} none swap sw 0 0\n"


def persist_swapfile(
    path: str,
    fstab_path: str = FSTAB_PATH,
    verbose: bool = False,
    dry_run: bool = False,
) -> bool:
    """Append the swap entry for path unless the exact line is already there.

    Matching is plain substring containment on the raw line, so an entry
    for the same file with different spacing counts as a different line.
    Returns True if the line was appended.
    """

    def log(msg: str) -> None:
        if verbose:
            print(msg)

    line = fstab_line(path)
    try:
        with open(fstab_path) as f:
            existing = f.read()
    except OSError as e:
        log(f"Could not read {fstab_path} ({e}); treating it as empty.")
        existing = ""

    if line in existing:
        print(f"{fstab_path} already contains the same entry, skipping append.")
        return False

    # keep the new entry on its own line
    prefix = "\n" if existing and not existing.endswith("\n") else ""
    if dry_run:
        print(f"[dry-run] append '{line.strip()}' to {fstab_path}")
        return True

    try:
        with open(fstab_path, "a") as f:
            f.write(prefix + line)
    except OSError as e:
        raise FilesystemError(f"appending to {fstab_path}: {e}") from e
    print(f"Appended to {fstab_path}: {line.strip()}")
    return True
