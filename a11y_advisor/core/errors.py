class AuditServiceError(Exception):
    """Base class for failures the HTTP layer knows how to report."""


class ValidationError(AuditServiceError):
    """Request body is missing a field or has the wrong shape."""


class AuditProcessError(AuditServiceError):
    def __init__(self, url: str, stderr: str):
        self.url = url
        self.stderr = stderr
        super().__init__(f"Lighthouse failed for {url}: {stderr.strip()}")


class ReportParseError(AuditServiceError):
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not read Lighthouse report for {url}: {reason}")


class AIAnalysisError(AuditServiceError):
    """Raised inside the advisor only; never leaves analyze()."""
