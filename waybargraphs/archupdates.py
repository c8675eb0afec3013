"""Waybar module reporting pending pacman and AUR package updates."""

from __future__ import annotations

import re
import subprocess
import sys
import time

DEFAULT_INTERVAL = 300
_U32_MAX = 2**32 - 1
_WORDS_PER_ENTRY = 4
_EMPTY_RESULT = (0, "0")

_HELP = """Usage: {prog} [options]

Options:
  --interval <seconds>   Set the interval seconds between updates get refreshed from internet (default: 300)
"""


def _parse_unsigned(text: str, flag: str) -> int:
    if not re.fullmatch(r"\+?[0-9]+", text) or int(text) > _U32_MAX:
        raise ValueError(f"{flag} must be greater than 0!")
    return int(text)


def parse_args(argv: list[str]) -> int | None:
    """Return the sync interval in seconds, or None when help was requested."""
    args = list(argv)
    interval = DEFAULT_INTERVAL
    for arg, value in zip(args, args[1:] + [None]):
        if arg == "--help":
            return None
        if arg == "--interval" and value is not None:
            interval = _parse_unsigned(value, "--interval")
    if interval == 0:
        raise ValueError("interval must be greater than 0")
    return interval


def sync_database() -> None:
    """Refresh the update database from the network."""
    subprocess.run(["checkupdates", "--nocolor"], capture_output=True, check=False)


def count_updates(output: str) -> int:
    """Count the update entries in checkupdates output."""
    if not output:
        return 0
    return output.count(" -> ")


def _query(command: str) -> tuple[int, str]:
    result = subprocess.run(
        [command, "--nosync", "--nocolor"], capture_output=True, check=False
    )
    if result.returncode < 0:
        return _EMPTY_RESULT
    output = result.stdout.decode("utf-8", errors="replace")
    if not output:
        return _EMPTY_RESULT
    return count_updates(output), output


def get_updates() -> tuple[int, str]:
    """Return the number of pending pacman updates and the raw listing."""
    return _query("checkupdates")


def get_aur_updates() -> tuple[int, str]:
    """Return the number of pending updates including AUR, and the raw listing."""
    return _query("checkupdates-with-aur")


def columns_for(count: int) -> int:
    """Number of tooltip columns used for a given number of updates."""
    if count < 10:
        return 1
    if count < 20:
        return 2
    if count < 80:
        return 3
    return 4


def align_words(output: str) -> str:
    """Lay the listing out as aligned rows of four words."""
    words = output.split()
    padding = [0] * _WORDS_PER_ENTRY
    for index, word in enumerate(words):
        slot = index % _WORDS_PER_ENTRY
        padding[slot] = max(padding[slot], len(word))
    padded = [
        word.ljust(padding[index % _WORDS_PER_ENTRY])
        for index, word in enumerate(words)
    ]
    rows = (
        " ".join(padded[start:start + _WORDS_PER_ENTRY])
        for start in range(0, len(padded), _WORDS_PER_ENTRY)
    )
    return "\n".join(rows)


def _layout(lines: list[str], columns: int, longest: int) -> tuple[str, int]:
    parts = []
    for position, line in enumerate(lines):
        separator = "\t | " if position % columns < columns - 1 else "\n"
        parts.append(line + separator)
        if len(line) > longest:
            longest = len(line) + 3 * (columns - 1)
    return "".join(parts), longest


def _escape(text: str) -> str:
    return (
        text.rstrip()
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )


def render(updates: int, output: str, aur_updates: int, aur_output: str) -> str:
    """Build the JSON line that waybar displays."""
    columns = columns_for(updates) if updates > 0 else 1
    longest = 0
    text = ""
    aur_text = ""
    reference = output

    if updates > 0:
        reference = align_words(output)
        text, longest = _layout(reference.splitlines(), columns, longest)

    if aur_updates > 0:
        kept = []
        for line in align_words(aur_output).splitlines():
            if line in reference:
                aur_updates -= 1
            else:
                kept.append(line)
        aur_text, longest = _layout(kept, columns, longest)

    if updates <= 0 and aur_updates <= 0:
        return '{"text":"","tooltip":"","class":"","alt":""}'

    rule = "¯" * (columns * longest)
    tooltip = ""
    if updates > 0:
        tooltip = f"PACMAN ({updates})\\n{rule} \\n{_escape(text)}\\n"
    if aur_updates > 0:
        tooltip = f"{tooltip}\\nAUR ({aur_updates}) \\n{rule}\\n{_escape(aur_text)}\\n"

    return (
        f'{{"text":"{updates + aur_updates}({updates}+{aur_updates})",'
        f'"tooltip":"{tooltip}","class":"has-updates","alt":"{tooltip}"}}'
    )


def main(argv: list[str] | None = None) -> int:
    """Poll for updates forever, printing one JSON line per second."""
    try:
        interval = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    if interval is None:
        print(_HELP.format(prog=sys.argv[0]))
        return 0

    tick = interval
    while True:
        if tick % interval == 0:
            sync_database()
            tick = 0
        updates, output = get_updates()
        aur_updates, aur_output = get_aur_updates()
        print(render(updates, output, aur_updates, aur_output), flush=True)
        tick += 1
        time.sleep(1)