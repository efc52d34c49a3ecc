# hookradar/decision/enrichment.py
from hookradar.schemas.decision import Decision
from hookradar.schemas.remediation import RemediationResults

SUCCESS_MARK = "✓"
FAILURE_MARK = "✗"


def format_duration(seconds: float) -> str:
    """
    Render a duration for the remediation report.

    Under one second: whole milliseconds ("999ms"). Otherwise seconds with
    one decimal place ("1.0s", "2.3s"). Milliseconds are truncated first.
    """
    ms = round(seconds * 1_000_000) // 1000
    if ms < 1000:
        return f"{ms}ms"
    return f"{ms / 1000.0:.1f}s"


def build_remediation_summary(results: RemediationResults) -> str:
    count = len(results.results)
    noun = "strategy" if count == 1 else "strategies"
    lines = [f"Remediation actions taken ({count} {noun}, {format_duration(results.total_duration)} total):"]

    for result in results.results:
        mark = SUCCESS_MARK if result.success else FAILURE_MARK
        lines.append(f"  {mark} {result.message} ({format_duration(result.duration)})")

    return "\n".join(lines)


def enrich_with_remediation(decision: Decision, results: RemediationResults) -> None:
    """
    Append the remediation report to `decision.reason` in place.

    No-op unless remediation executed and produced at least one result.
    Only `reason` is touched; the block flag never changes.
    """
    if not results.executed or not results.results:
        return

    summary = build_remediation_summary(results)
    if decision.reason:
        decision.reason += "\n\n" + summary
    else:
        decision.reason = summary
