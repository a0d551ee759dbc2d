"""
Line Differ Service - Compare two texts line by line

The main comparison is positional: line i of one text is compared with line
i of the other. A single inserted line therefore shows up as a run of
"modified" lines followed by one "added" line. The LCS-based unified patch
is available separately through unified_diff().
"""

from __future__ import annotations

from difflib import unified_diff

from models.diff import DiffKind, DiffLine, DiffResult, DiffSummary

_REPORT_TEMPLATES = {
    DiffKind.ADDED: "Line {n}: [added] {new}",
    DiffKind.REMOVED: "Line {n}: [removed] {new}",
    DiffKind.MODIFIED: "Line {n}: [modified] {old} → {new}",
}


class LineDiffer:
    """Positional line differ"""

    def diff_lines(self, text_a: str, text_b: str) -> list[DiffLine]:
        """Compare the texts index by index.

        Only "\\n" separates lines, so "" is a single empty line and a
        trailing newline adds an empty last line.
        """
        lines_a = text_a.split("\n")
        lines_b = text_b.split("\n")
        diffs = []

        for i in range(max(len(lines_a), len(lines_b))):
            if i >= len(lines_a):
                diffs.append(
                    DiffLine(line_number=i + 1, kind=DiffKind.ADDED, new_content=lines_b[i])
                )
            elif i >= len(lines_b):
                diffs.append(
                    DiffLine(line_number=i + 1, kind=DiffKind.REMOVED, new_content=lines_a[i])
                )
            elif lines_a[i] != lines_b[i]:
                diffs.append(
                    DiffLine(
                        line_number=i + 1,
                        kind=DiffKind.MODIFIED,
                        new_content=lines_b[i],
                        old_content=lines_a[i],
                    )
                )

        return diffs

    def summarize(self, lines: list[DiffLine]) -> DiffSummary:
        """Count differences per kind"""
        summary = DiffSummary(total=len(lines))
        for line in lines:
            if line.kind is DiffKind.ADDED:
                summary.added += 1
            elif line.kind is DiffKind.REMOVED:
                summary.removed += 1
            else:
                summary.modified += 1
        return summary

    def render_report(self, lines: list[DiffLine]) -> str:
        """Plain text report, one line per difference"""
        return "\n".join(
            _REPORT_TEMPLATES[line.kind].format(
                n=line.line_number, new=line.new_content, old=line.old_content
            )
            for line in lines
        )

    def compare(self, text_a: str, text_b: str) -> DiffResult:
        """Diff, summary and report in one result"""
        lines = self.diff_lines(text_a, text_b)
        return DiffResult(
            lines=lines,
            summary=self.summarize(lines),
            report=self.render_report(lines),
        )

    def unified_diff(
        self,
        text_a: str,
        text_b: str,
        name_a: str = "a",
        name_b: str = "b",
    ) -> str:
        """Generate a unified patch (LCS alignment, not positional)"""
        original_lines = text_a.splitlines(keepends=True)
        new_lines = text_b.splitlines(keepends=True)

        # Ensure last lines have newlines for proper diff
        if original_lines and not original_lines[-1].endswith("\n"):
            original_lines[-1] += "\n"
        if new_lines and not new_lines[-1].endswith("\n"):
            new_lines[-1] += "\n"

        return "".join(
            unified_diff(
                original_lines,
                new_lines,
                fromfile=f"a/{name_a}",
                tofile=f"b/{name_b}",
            )
        )


_differ = LineDiffer()


def diff_lines(text_a: str, text_b: str) -> list[DiffLine]:
    """Module-level shortcut for LineDiffer.diff_lines"""
    return _differ.diff_lines(text_a, text_b)
