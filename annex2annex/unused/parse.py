"""Parser for `git annex unused` output."""

import re

from annex2annex.unused.models import UnusedEntry

BAD_MARKER = "Some corrupted files have been preserved by fsck, just in case"
TMP_MARKER = "Some partially transferred data exists in temporary files"

_ENTRY_RE = re.compile(r"^    ([0-9]+) +([^ ]+)$")


def parse_unused_report(report: str) -> list[UnusedEntry]:
    """Parse the numbered keys out of a `git annex unused` report.

    git-annex prints a heading before each group of keys. Keys following the
    fsck heading are marked bad, keys following the temporary files heading
    are marked tmp, until the next heading.

    Args:
        report: The full stdout of `git annex unused`.

    Returns:
        Entries in report order.
    """
    bad, tmp = False, False
    entries = []
    for line in report.split("\n"):
        if BAD_MARKER in line:
            bad, tmp = True, False
        elif TMP_MARKER in line:
            bad, tmp = False, True
        else:
            match = _ENTRY_RE.match(line)
            if match:
                entries.append(
                    UnusedEntry(number=int(match.group(1)), key=match.group(2), bad=bad, tmp=tmp)
                )
    return entries
