import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from a11y_advisor import config
from a11y_advisor.core.errors import AuditProcessError

log = logging.getLogger("a11y-advisor")


@dataclass
class LighthouseConfig:
    # only the json report is read back; other formats are not requested
    output: list[str] = field(default_factory=lambda: ["json"])
    categories: list[str] = field(default_factory=lambda: list(config.AUDIT_CATEGORIES))
    chrome_flags: list[str] = field(default_factory=lambda: list(config.CHROME_FLAGS))
    max_wait_for_load: int = config.MAX_WAIT_FOR_LOAD
    binary: str = config.LIGHTHOUSE_BIN

    @property
    def primary_category(self) -> str:
        return self.categories[0] if self.categories else "accessibility"


def build_command(url: str, output_path: Path, cfg: LighthouseConfig) -> list[str]:
    """argv for one audit; no shell is involved, so flags are passed unquoted."""
    cmd = [cfg.binary, url]
    cmd += [f"--only-categories={c}" for c in cfg.categories]
    cmd += ["--quiet", "--output=json", f"--output-path={output_path}"]
    cmd += [f"--chrome-flags={f}" for f in cfg.chrome_flags]
    cmd.append(f"--max-wait-for-load={cfg.max_wait_for_load}")
    return cmd


async def run_lighthouse(url: str, output_path: Path, cfg: LighthouseConfig) -> None:
    cmd = build_command(url, output_path, cfg)
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        log.error("Could not start %s for %s: %s", cfg.binary, url, e)
        raise AuditProcessError(url, str(e)) from e

    try:
        _, stderr = await proc.communicate()
    except asyncio.CancelledError:
        log.warning("Audit of %s cancelled, killing %s", url, cfg.binary)
        proc.kill()
        await proc.wait()
        raise
    err_text = stderr.decode("utf-8", errors="replace")
    if proc.returncode != 0:
        log.error("Error running Lighthouse for %s (exit %s): %s", url, proc.returncode, err_text)
        raise AuditProcessError(url, err_text)

    log.info("Lighthouse audit completed for %s", url)
