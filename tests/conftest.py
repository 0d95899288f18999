import json
from pathlib import Path

import pytest

from a11y_advisor import config

IMAGE_ALT_AUDIT = {
    "id": "image-alt",
    "title": "Image elements must have alternate text",
    "description": "Informative elements should aim for short, descriptive alternate text.",
    "score": 0,
    "details": {
        "items": [
            {"node": {"snippet": '<img src="logo.png">', "selector": "header > img"}},
        ]
    },
}


def make_report(score=0.9, audits=None, category="accessibility") -> dict:
    return {
        "categories": {category: {"id": category, "score": score}},
        "audits": audits if audits is not None else {"image-alt": IMAGE_ALT_AUDIT},
    }


class FakeLighthouse:
    """Stands in for the lighthouse binary: writes a canned report per URL."""

    def __init__(self, reports: dict):
        self.reports = reports
        self.calls = []

    async def __call__(self, url, output_path: Path, cfg):
        self.calls.append((url, output_path))
        report = self.reports[url]
        if isinstance(report, str):
            output_path.write_text(report, encoding="utf-8")
        elif report is not None:
            output_path.write_text(json.dumps(report), encoding="utf-8")


class FakeAnalyzer:
    def __init__(self, reply="<div class=\"issue-card\">fix</div>"):
        self.reply = reply
        self.calls = []

    async def __call__(self, issues_text, api_key):
        self.calls.append((issues_text, api_key))
        return self.reply


@pytest.fixture
def output_dir(tmp_path, monkeypatch):
    out = tmp_path / "lighthouse-reports"
    monkeypatch.setattr(config, "OUTPUT_DIR", out)
    monkeypatch.setattr(config, "SKIP_PASSING_SCORE", None)
    monkeypatch.setattr(config, "REDIS_URL", None)
    return out
