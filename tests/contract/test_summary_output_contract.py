from __future__ import annotations

import re
from pathlib import Path

from manifest_resolver.cli import main as cli_main

"""SUMMARY line contract: exactly one line, fixed key order."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY groups=([0-9]+) base_rows=([0-9]+) rows=([0-9]+) "
    r"matched=([0-9]+) unmatched=([0-9]+)$"
)


def test_summary_line_matches_contract(write_config, write_workbook: Path, capsys):
    assert cli_main([]) == 0
    lines = [ln for ln in capsys.readouterr().out.splitlines() if ln.startswith("SUMMARY")]
    assert len(lines) == 1
    m = SUMMARY_PATTERN.match(lines[0])
    assert m is not None
    groups, base_rows, rows, matched, unmatched = (int(x) for x in m.groups())
    # matched + unmatched == peer groups resolved
    assert matched + unmatched == groups - 1
    assert base_rows <= rows


def test_every_output_line_is_labeled(write_config, write_workbook: Path, capsys):
    cli_main([])
    for line in capsys.readouterr().out.splitlines():
        assert line.split(" ", 1)[0] in {"INFO", "WARN", "ERROR", "DEBUG", "SUMMARY"}
