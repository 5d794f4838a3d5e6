"""Rendering of unused entries for review.

Contains:
- render_unused_entry: Lines describing one unused entry
"""

from annex2annex.unused.models import UnusedEntry


def render_unused_entry(entry: UnusedEntry, indent: str = "    ") -> list[str]:
    """Render an unused entry with its history for display.

    Args:
        entry: The entry to render. History is shown if it has been looked up.
        indent: Prefix for each history line.

    Returns:
        Lines of output, without line breaks.
    """
    lines = [f"unused file #{entry.number} ({entry.key}):", ""]
    if entry.bad:
        lines.append(f"{indent}(corrupted content preserved by git annex fsck)")
    elif entry.tmp:
        lines.append(f"{indent}(partially transferred content)")
    elif entry.log_lines:
        lines.extend(f"{indent}{line}" if line else "" for line in entry.log_lines)
    else:
        lines.append(f"{indent}(no history found)")
    lines.extend(
        [
            "",
            f"you can drop it with: `git annex dropunused {entry.number}`",
            "",
        ]
    )
    return lines
