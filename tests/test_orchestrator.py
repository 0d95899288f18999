import pytest

from a11y_advisor import config
from a11y_advisor.core.errors import AuditProcessError, ReportParseError
from a11y_advisor.core.lighthouse import LighthouseConfig
from a11y_advisor.core.orchestrator import run_batch

from conftest import FakeAnalyzer, FakeLighthouse, make_report

URLS = ["https://a.com/x/y", "https://b.com", "http://c.com/"]


async def test_results_follow_input_order(output_dir):
    lighthouse = FakeLighthouse({
        "https://a.com/x/y": make_report(score=0.76),
        "https://b.com": make_report(score=0.9, audits={}),
        "http://c.com/": make_report(score=None),
    })
    analyzer = FakeAnalyzer()

    results = await run_batch(URLS, "k", runner=lighthouse, analyzer=analyzer)

    assert [r.url for r in results] == URLS
    assert [r.score for r in results] == [76, 90, 0]
    assert [url for url, _ in lighthouse.calls] == URLS
    assert lighthouse.calls[0][1].name == "a.com_x_y.json"
    assert lighthouse.calls[0][1].parent.parent == output_dir
    # empty issue list still goes to the AI step
    assert analyzer.calls[1] == ("", "k")
    assert results[0].issues_text.startswith("[1]: Image elements must have alternate text")
    assert all(r.ai_fixes == analyzer.reply for r in results)


async def test_process_failure_aborts_batch(output_dir):
    class Failing(FakeLighthouse):
        async def __call__(self, url, output_path, cfg):
            if url == "https://b.com":
                self.calls.append((url, output_path))
                raise AuditProcessError(url, "Chrome crashed")
            await super().__call__(url, output_path, cfg)

    lighthouse = Failing({u: make_report() for u in URLS})
    analyzer = FakeAnalyzer()
    with pytest.raises(AuditProcessError) as exc:
        await run_batch(URLS, "k", runner=lighthouse, analyzer=analyzer)

    assert exc.value.url == "https://b.com"
    assert [url for url, _ in lighthouse.calls] == ["https://a.com/x/y", "https://b.com"]
    assert len(analyzer.calls) == 1


async def test_missing_report_raises_parse_error(output_dir):
    lighthouse = FakeLighthouse({"https://a.com/x/y": None})
    with pytest.raises(ReportParseError):
        await run_batch(["https://a.com/x/y"], "k", runner=lighthouse, analyzer=FakeAnalyzer())


async def test_malformed_report_raises_parse_error(output_dir):
    lighthouse = FakeLighthouse({"https://a.com/x/y": "{oops"})
    with pytest.raises(ReportParseError):
        await run_batch(["https://a.com/x/y"], "k", runner=lighthouse, analyzer=FakeAnalyzer())


async def test_concurrent_batches_use_separate_files(output_dir):
    lighthouse = FakeLighthouse({"https://a.com": make_report()})
    await run_batch(["https://a.com"], "k", runner=lighthouse, analyzer=FakeAnalyzer())
    await run_batch(["https://a.com"], "k", runner=lighthouse, analyzer=FakeAnalyzer())
    first, second = (path for _, path in lighthouse.calls)
    assert first.name == second.name == "a.com.json"
    assert first != second


async def test_passing_urls_still_analyzed_by_default(output_dir):
    analyzer = FakeAnalyzer()
    lighthouse = FakeLighthouse({"https://a.com": make_report(score=1)})
    results = await run_batch(["https://a.com"], "k", runner=lighthouse, analyzer=analyzer)
    assert len(analyzer.calls) == 1
    assert results[0].score == 100


async def test_skip_passing_score_toggle(output_dir, monkeypatch):
    monkeypatch.setattr(config, "SKIP_PASSING_SCORE", 90)
    analyzer = FakeAnalyzer()
    lighthouse = FakeLighthouse({
        "https://good.com": make_report(score=0.95),
        "https://bad.com": make_report(score=0.5),
    })
    results = await run_batch(
        ["https://good.com", "https://bad.com"], "k", runner=lighthouse, analyzer=analyzer
    )
    assert [r.url for r in results] == ["https://good.com", "https://bad.com"]
    assert results[0].ai_fixes == ""
    assert results[1].ai_fixes == analyzer.reply
    assert len(analyzer.calls) == 1


async def test_primary_category_drives_score(output_dir):
    lighthouse = FakeLighthouse({"https://a.com": make_report(score=0.42, category="seo")})
    cfg = LighthouseConfig(categories=["seo"])
    results = await run_batch(["https://a.com"], "k", cfg=cfg, runner=lighthouse, analyzer=FakeAnalyzer())
    assert results[0].score == 42
