from __future__ import annotations

from ..models.import_result import ImportResult

"""SUMMARY line rendering for one import run.

Format:
SUMMARY file={name} status={code} encoding={enc|-} extracted={n} invalid={n}
warnings={n} elapsed_sec={elapsed}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Avoid scientific notation for very small numbers
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(file_name: str, result: ImportResult, elapsed_seconds: float) -> str:
    """Render the SUMMARY line for an ImportResult.

    Examples:
        >>> from simple_csv_importer.models import ImportResult, ImportStatus
        >>> result = ImportResult(status=ImportStatus.SUCCESS, encoding="utf-8")
        >>> render_summary_line("users.csv", result, 2.0)
        'SUMMARY file=users.csv status=200 encoding=utf-8 extracted=0 invalid=0 warnings=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY file={file_name} "
        f"status={int(result.status)} "
        f"encoding={result.encoding or '-'} "
        f"extracted={len(result.extracted)} "
        f"invalid={len(result.invalid)} "
        f"warnings={len(result.warnings)} "
        f"elapsed_sec={_format_seconds(elapsed_seconds)}"
    )
