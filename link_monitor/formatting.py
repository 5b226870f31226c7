from __future__ import annotations


def format_outcome(target: str, ok: bool) -> str:
    if ok:
        return f"{target} is up!"
    return f"{target} might be down!"


def print_line(line: str) -> None:
    print(line, flush=True)
