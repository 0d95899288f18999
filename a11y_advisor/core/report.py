import json
import logging
from pathlib import Path
from typing import Any

from a11y_advisor.core.errors import ReportParseError
from a11y_advisor.models.schema import Issue

log = logging.getLogger("a11y-advisor")


def load_report(url: str, path: Path) -> dict:
    """Read the Lighthouse JSON written for `url`."""
    try:
        report = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        log.error("Lighthouse report missing for %s at %s", url, path)
        raise ReportParseError(url, f"report file not found: {path.name}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        log.error("Lighthouse report for %s is not valid JSON: %s", url, e)
        raise ReportParseError(url, f"invalid JSON: {e}") from e

    if not isinstance(report, dict):
        raise ReportParseError(url, "report is not a JSON object")
    for key in ("categories", "audits"):
        if not isinstance(report.get(key), dict):
            raise ReportParseError(url, f"report has no '{key}' mapping")
    return report


def category_score(report: dict, category: str) -> int:
    """0-100 score of one category; 0 when the score is missing or null."""
    cat = report.get("categories", {}).get(category) or {}
    raw = cat.get("score") if isinstance(cat, dict) else None
    if not isinstance(raw, (int, float)) or isinstance(raw, bool):
        return 0
    score = raw * 100
    if not score:
        return 0
    return max(0, min(100, round(score)))


def _snippet(item: Any) -> str:
    node = item.get("node") if isinstance(item, dict) else None
    if isinstance(node, dict) and isinstance(node.get("snippet"), str) and node["snippet"]:
        return node["snippet"]
    return json.dumps(item, indent=2)


def extract_issues(report: dict) -> list[Issue]:
    """Checks that failed outright (score exactly 0), in report order."""
    issues: list[Issue] = []
    for check in report.get("audits", {}).values():
        if not isinstance(check, dict):
            continue
        score = check.get("score")
        # True == 1 and False == 0 in Python; booleans are not scores
        if isinstance(score, bool) or not isinstance(score, (int, float)) or score != 0:
            continue

        details = check.get("details")
        items = details.get("items") if isinstance(details, dict) else None
        if not isinstance(items, list):
            items = []
        issues.append(
            Issue(
                serial_number=len(issues) + 1,
                id=check.get("id"),
                title=check.get("title") or "No title",
                description=check.get("description") or "No description",
                snippets=[_snippet(item) for item in items],
            )
        )
    return issues


def render_issue(issue: Issue) -> str:
    text = f"[{issue.serial_number}]: {issue.title} - {issue.description}"
    if issue.snippets:
        lines = "\n".join(f"    [{j}]: {s}" for j, s in enumerate(issue.snippets, start=1))
        text += f"\n  Details:\n{lines}"
    return text


def render_issues(issues: list[Issue]) -> str:
    return "\n\n".join(render_issue(i) for i in issues)
