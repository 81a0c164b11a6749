"""Parse human size tokens (5G, 512M, 1024) and format byte counts."""
from swap_manager.errors import SizeOverflowError, SizeParseError

U64_MAX = 2**64 - 1

SUFFIXES = {
    "K": 1024,
    "M": 1024**2,
    "G": 1024**3,
    "T": 1024**4,
}

UNITS = ("B", "KiB", "MiB", "GiB", "TiB")


def parse_size(token: str) -> int:
    """Return the byte count for a size token.

    Accepts a non-negative integer with an optional case-insensitive
    K/M/G/T suffix (powers of 1024). No suffix means plain bytes.
    """
    if not token:
        raise SizeParseError("empty size")

    last = token[-1].upper()
    if last in SUFFIXES:
        num_str, multiplier = token[:-1], SUFFIXES[last]
    elif last.isascii() and last.isdigit():
        num_str, multiplier = token, 1
    else:
        raise SizeParseError(f"Unknown size suffix in '{token}'. Use K/M/G/T or plain bytes.")

    if not num_str:
        raise SizeParseError(f"Malformed size: {token}")
    # ASCII digits only, no sign, spaces or underscores
    if not (num_str.isascii() and num_str.isdigit()):
        raise SizeParseError(f"Malformed size: {token} (numeric part must be a whole number)")

    magnitude = int(num_str)
    if magnitude > U64_MAX:
        raise SizeParseError(f"Malformed size: {token} (number too large)")

    size = magnitude * multiplier
    if size > U64_MAX:
        raise SizeOverflowError(f"size overflow: {token}")
    return size


def human_readable_bytes(n: int) -> str:
    """Format n with 1024-based units, e.g. 1536 -> '1.50 KiB'."""
    val = float(n)
    idx = 0
    while val >= 1024.0 and idx + 1 < len(UNITS):
        val /= 1024.0
        idx += 1
    if idx == 0:
        return f"{n} {UNITS[0]}"
    return f"{val:.2f} {UNITS[idx]}"
