import logging
from pathlib import Path
from typing import Awaitable, Callable, Optional

from a11y_advisor import config
from a11y_advisor.core.advisor import analyze
from a11y_advisor.core.lighthouse import LighthouseConfig, run_lighthouse
from a11y_advisor.core.report import category_score, extract_issues, load_report, render_issues
from a11y_advisor.core.utils import new_batch_dir, report_filename
from a11y_advisor.models.schema import AuditResult

log = logging.getLogger("a11y-advisor")

Runner = Callable[[str, Path, LighthouseConfig], Awaitable[None]]
Analyzer = Callable[[str, str], Awaitable[str]]


async def audit_url(
    url: str,
    api_key: str,
    batch_dir: Path,
    cfg: LighthouseConfig,
    runner: Optional[Runner] = None,
    analyzer: Optional[Analyzer] = None,
    skip_passing_score: Optional[int] = None,
) -> AuditResult:
    runner = runner or run_lighthouse
    analyzer = analyzer or analyze

    report_path = batch_dir / report_filename(url)
    log.info("Auditing %s", url)
    await runner(url, report_path, cfg)

    report = load_report(url, report_path)
    score = category_score(report, cfg.primary_category)
    issues_text = render_issues(extract_issues(report))

    if skip_passing_score is not None and score >= skip_passing_score:
        log.info("%s scored %s, skipping AI analysis", url, score)
        ai_fixes = ""
    else:
        ai_fixes = await analyzer(issues_text, api_key)

    return AuditResult(url=url, score=score, issues_text=issues_text, ai_fixes=ai_fixes)


async def run_batch(
    urls: list[str],
    api_key: str,
    cfg: Optional[LighthouseConfig] = None,
    output_dir: Optional[Path] = None,
    runner: Optional[Runner] = None,
    analyzer: Optional[Analyzer] = None,
) -> list[AuditResult]:
    """
    Audit each URL in order, one at a time.
    AuditProcessError / ReportParseError from any URL aborts the batch.
    """
    cfg = cfg or LighthouseConfig()
    batch_dir = new_batch_dir(output_dir or config.OUTPUT_DIR)

    results: list[AuditResult] = []
    for url in urls:
        results.append(
            await audit_url(url, api_key, batch_dir, cfg, runner, analyzer, config.SKIP_PASSING_SCORE)
        )

    log.info("Batch of %d URL(s) finished, reports in %s", len(results), batch_dir)
    return results
