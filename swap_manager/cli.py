#!/usr/bin/env python3
"""
swap-manager — show, set and empty swap. Commands may be chained:

  swap-manager show
  swap-manager set 5G --replace --persist
  swap-manager set 512M show
  swap-manager set 1G --replace show empty

Actions run left to right; the first failure stops the chain.
"""
import argparse
import sys
from collections import deque
from dataclasses import dataclass

from swap_manager.errors import SwapManagerError, UsageError
from swap_manager.orchestrator import RunOptions, empty_swap, set_swap
from swap_manager.sizes import parse_size
from swap_manager.status import show_swaps

__version__ = "0.1.0"

PROG = "swap-manager"
SET_FLAGS = ("--replace", "--persist")


@dataclass(frozen=True, slots=True)
class Show:
    pass


@dataclass(frozen=True, slots=True)
class Empty:
    pass


@dataclass(frozen=True, slots=True)
class Set:
    size_token: str
    replace: bool = False
    persist: bool = False


Action = Show | Empty | Set


def next_action(queue: deque[str]) -> Action:
    """Pop one action (and its arguments) off the front of queue."""
    tok = queue.popleft()
    if tok == "show":
        return Show()
    if tok == "empty":
        return Empty()
    if tok == "set":
        if not queue:
            raise UsageError("'set' requires a size argument, e.g. 5G")
        size_token = queue.popleft()
        parse_size(size_token)
        replace = persist = False
        while queue and queue[0].startswith("--"):
            flag = queue.popleft()
            if flag == "--replace":
                replace = True
            elif flag == "--persist":
                persist = True
            else:
                raise UsageError(f"Unknown flag for 'set': {flag}")
        return Set(size_token, replace=replace, persist=persist)
    if tok.startswith("-"):
        raise UsageError(f"Unexpected global flag or misplaced flag: {tok}")
    raise UsageError(f"Unknown command: {tok} (expected set/show/empty)")


def execute(action: Action, options: RunOptions) -> None:
    if isinstance(action, Show):
        show_swaps(options.swaps_path)
    elif isinstance(action, Empty):
        empty_swap(options)
    elif isinstance(action, Set):
        set_swap(action.size_token, action.replace, action.persist, options)


def run_actions(tokens: list[str], options: RunOptions | None = None) -> None:
    """Run chained actions in order, stopping at the first error."""
    options = options or RunOptions()
    if not tokens:
        print(f"No actions provided. Try: {PROG} --help")
        return
    queue = deque(tokens)
    while queue:
        execute(next_action(queue), options)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog=PROG,
        description="Manage swap: show, set, empty. Commands may be chained.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Actions:
  show                              list active swap areas and totals
  empty                             swapoff -a then swapon -a
  set SIZE [--replace] [--persist]  create and enable {RunOptions().swapfile_path}
                                    SIZE is bytes or K/M/G/T (1024-based)
                                    --replace  disable all other swap first
                                    --persist  add the swapfile to /etc/fstab

Usage examples:
  {PROG} show
  {PROG} set 5G --replace --persist
  {PROG} set 512M show
  {PROG} set 1G --replace show empty

Notes:
  set and empty manipulate swap devices and files: run as root (sudo).
  Test in a VM or container before using on production systems.
  A failed action stops the chain; completed actions are not undone.
""",
    )
    ap.add_argument("-V", "--version", action="version", version=f"{PROG} {__version__}")
    ap.add_argument("-v", "--verbose", action="store_true", help="verbose output")
    ap.add_argument("-n", "--dry-run", action="store_true", help="show what would be done without making changes")
    ap.add_argument("actions", nargs=argparse.REMAINDER, help="actions and their args, e.g. set 5G show")
    return ap


def main() -> None:
    ap = build_parser()
    argv = sys.argv[1:]
    # -h/--help anywhere in the chain prints the full help
    if "-h" in argv or "--help" in argv:
        ap.print_help()
        sys.exit(0)

    args, extras = ap.parse_known_args(argv)
    options = RunOptions(verbose=args.verbose, dry_run=args.dry_run)
    try:
        if extras:
            raise UsageError(f"Unexpected global flag or misplaced flag: {extras[0]}")
        run_actions(args.actions, options)
    except SwapManagerError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(130)
