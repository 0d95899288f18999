import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx

from a11y_advisor import cache, config
from a11y_advisor.core.errors import AIAnalysisError

log = logging.getLogger("a11y-advisor")

AI_FAILURE_TEXT = "AI analysis failed."

PROMPT_TEMPLATE = """
You are an expert UI/Accessibility engineer. Suggest specific HTML/CSS/ARIA fixes for the accessibility issues found.

Return output ONLY in clean HTML using TailwindCSS classes.
Strictly follow this structure for every issue:

<div class="issue-card">
  <p class="issue-title">[Serial No]: [Issue Title]</p>
  <p class="issue-solution">
    <span class="strong">Solution:</span> [Fix for the issue, ideally with updated HTML wrapped in <code class="code-block">...</code> blocks]
  </p>
</div>

Constraints:
- Do NOT add any pre-text or explanation.
- Only generate the HTML output for each issue in the above structure.
- Wrap any code in <code> blocks with Tailwind styling as shown.
- If not enough context, just return:
<div class="issue-card">
  <p class="issue-title error-text">[Serial No]: [Issue Title]</p>
  <p class="issue-solution warning-text">More context is needed for this issue.</p>
</div>

Issues:
{issues}
"""

_CODE_FENCE = re.compile(r"```html|```")


@dataclass
class AnalysisOutcome:
    ok: bool
    text: str = ""
    error: Optional[str] = None

    @property
    def fixes(self) -> str:
        return self.text if self.ok else AI_FAILURE_TEXT


def build_prompt(issues_text: str) -> str:
    return PROMPT_TEMPLATE.format(issues=issues_text)


def strip_code_fences(text: str) -> str:
    return _CODE_FENCE.sub("", text)


def generate_url() -> str:
    return f"{config.GEMINI_API_BASE}/models/{config.GEMINI_MODEL}:generateContent"


def _error_message(r: httpx.Response) -> str:
    try:
        return r.json().get("error", {}).get("message") or r.reason_phrase
    except (ValueError, AttributeError):
        return r.reason_phrase


def _first_text(data: dict) -> str:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise AIAnalysisError(f"Unexpected response shape: {e!r}") from e
    if not isinstance(text, str) or not text:
        raise AIAnalysisError("Empty or non-text completion")
    return text


async def request_fixes(issues_text: str, api_key: str, client: httpx.AsyncClient) -> str:
    """One generateContent call; raises AIAnalysisError on any failure."""
    body = {"contents": [{"parts": [{"text": build_prompt(issues_text)}]}]}
    # key goes in a header so it never shows up in request logs
    headers = {"Content-Type": "application/json", "x-goog-api-key": api_key}
    try:
        r = await client.post(generate_url(), json=body, headers=headers)
    except httpx.HTTPError as e:
        raise AIAnalysisError(f"Request failed: {e!r}") from e
    except Exception as e:
        # message left out, it may echo the header holding the key
        raise AIAnalysisError(f"Request failed: {type(e).__name__}") from e

    if r.status_code != 200:
        raise AIAnalysisError(f"API Error: {r.status_code} {_error_message(r)}")
    try:
        data = r.json()
    except ValueError as e:
        raise AIAnalysisError("Response is not JSON") from e
    return strip_code_fences(_first_text(data))


async def run_analysis(
    issues_text: str, api_key: str, client: Optional[httpx.AsyncClient] = None
) -> AnalysisOutcome:
    key = cache.cache_key_for_issues(issues_text, config.GEMINI_MODEL)
    cached = await cache.get_cached_fixes(key)
    if cached is not None:
        log.info("Returning cached AI fixes")
        return AnalysisOutcome(ok=True, text=cached)

    try:
        if client is not None:
            fixes = await request_fixes(issues_text, api_key, client)
        else:
            async with httpx.AsyncClient(timeout=config.GEMINI_TIMEOUT) as c:
                fixes = await request_fixes(issues_text, api_key, c)
    except AIAnalysisError as e:
        log.error("Error getting AI suggestions: %s", e)
        return AnalysisOutcome(ok=False, error=str(e))

    await cache.set_cached_fixes(key, fixes)
    return AnalysisOutcome(ok=True, text=fixes)


async def analyze(issues_text: str, api_key: str, client: Optional[httpx.AsyncClient] = None) -> str:
    """Remediation suggestions for `issues_text`, or AI_FAILURE_TEXT. Never raises."""
    outcome = await run_analysis(issues_text, api_key, client)
    return outcome.fixes
