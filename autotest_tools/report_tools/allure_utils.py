"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by the page objects, fixtures and HTTP client, plus
post-run processing of allure-results (summary, history, HTML generation).

Features:
- JSON/text/PNG attachment helpers
- Browser failure context (screenshot, URL, captured API traffic)
- Result summary for the runner's console output
- History carry-over between report generations

================================================================================
"""

import json
import shutil
import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data") -> None:
    """Attach data to the Allure report as pretty-printed JSON."""
    allure.attach(
        json.dumps(data, indent=2, default=str, ensure_ascii=False),
        name=name,
        attachment_type=allure.attachment_type.JSON,
    )


def attach_text(text: str, name: str = "Text") -> None:
    """Attach plain text to the Allure report."""
    allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)


def attach_png(content: bytes, name: str = "Screenshot") -> None:
    """Attach PNG bytes (e.g. a Playwright screenshot) to the Allure report."""
    allure.attach(content, name=name, attachment_type=allure.attachment_type.PNG)


def attach_failure_context(
    screenshot: Optional[bytes],
    url: str,
    api_responses: Optional[List[Dict[str, Any]]] = None,
) -> None:
    """
    Attach the browser state captured when a UI test fails.

    Args:
        screenshot: Full-page screenshot bytes, if one could be taken
        url: Page URL at the time of failure
        api_responses: Recent /api/ responses captured by the page object
    """
    with allure.step("Capture failure details"):
        if screenshot:
            attach_png(screenshot, name="failure_screenshot")
        attach_text(url, name="Current URL")
        if api_responses:
            attach_json(api_responses[-10:], name="Recent API Responses")


# ================================================================================
# Report Processing
# ================================================================================

@dataclass
class TestResultSummary:
    """Summary of test execution results."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    broken: int = 0
    skipped: int = 0
    unknown: int = 0
    duration_ms: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    # Not a test class despite the name
    __test__ = False

    @property
    def pass_rate(self) -> float:
        """Pass rate percentage over executed (non-skipped) tests."""
        executed = self.total - self.skipped
        if executed <= 0:
            return 0.0
        return (self.passed / executed) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "broken": self.broken,
            "skipped": self.skipped,
            "unknown": self.unknown,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
        }


class AllureReportProcessor:
    """
    Processes Allure results and generates reports.

    Provides methods for analyzing results, generating summaries,
    and managing report history.
    """

    def __init__(
        self,
        results_dir: Path,
        report_dir: Optional[Path] = None,
        history_dir: Optional[Path] = None,
    ):
        """
        Initialize processor.

        Args:
            results_dir: Allure results directory
            report_dir: Output report directory
            history_dir: History data directory
        """
        self.results_dir = Path(results_dir)
        self.report_dir = Path(report_dir or self.results_dir.parent / "allure-report")
        self.history_dir = Path(history_dir or self.results_dir.parent / "allure-history")

    def parse_results(self) -> List[Dict[str, Any]]:
        """Parse ``*-result.json`` files from the results directory."""
        results = []
        for result_file in self.results_dir.glob("*-result.json"):
            try:
                with open(result_file, encoding="utf-8") as f:
                    results.append(json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to parse {result_file}: {e}")
        return results

    def generate_summary(self) -> TestResultSummary:
        """
        Generate summary from results.

        Reruns produce several result files for one test; only the latest
        attempt per ``historyId`` is counted.
        """
        latest: Dict[str, Dict[str, Any]] = {}
        for result in self.parse_results():
            key = result.get("historyId") or result.get("uuid") or str(id(result))
            previous = latest.get(key)
            if previous is None or result.get("stop", 0) >= previous.get("stop", 0):
                latest[key] = result

        summary = TestResultSummary(total=len(latest))
        for result in latest.values():
            status = result.get("status", "unknown")
            if status == "passed":
                summary.passed += 1
            elif status == "failed":
                summary.failed += 1
            elif status == "broken":
                summary.broken += 1
            elif status == "skipped":
                summary.skipped += 1
            else:
                summary.unknown += 1
            summary.duration_ms += result.get("stop", 0) - result.get("start", 0)

        return summary

    def copy_history(self) -> None:
        """Copy history from previous report to results."""
        history_source = self.report_dir / "history"
        history_dest = self.results_dir / "history"

        if history_source.exists():
            if history_dest.exists():
                shutil.rmtree(history_dest)
            shutil.copytree(history_source, history_dest)
            logger.info("Copied history from previous report")

    def generate_report(self) -> bool:
        """
        Generate the Allure HTML report with the ``allure`` CLI.

        Returns:
            True if successful
        """
        self.copy_history()
        cmd = [
            "allure", "generate",
            str(self.results_dir),
            "-o", str(self.report_dir),
            "--clean",
        ]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            logger.warning("Allure CLI not found. Install allure-commandline to build HTML reports.")
            return False

        if result.returncode != 0:
            logger.error(f"Report generation failed: {result.stderr}")
            return False

        logger.info(f"Report generated at {self.report_dir}")
        return True

    def save_history(self) -> None:
        """Keep the latest report history for the next run."""
        history_source = self.report_dir / "history"
        if not history_source.exists():
            return

        current_dir = self.history_dir / "current"
        if current_dir.exists():
            shutil.rmtree(current_dir)
        self.history_dir.mkdir(parents=True, exist_ok=True)
        shutil.copytree(history_source, current_dir)
        logger.info(f"History saved to {self.history_dir}")

    def log_summary(self) -> TestResultSummary:
        """Log the execution summary and return it."""
        summary = self.generate_summary()
        logger.info("=" * 60)
        logger.info("TEST EXECUTION SUMMARY")
        logger.info("=" * 60)
        logger.info(f"Total Tests:    {summary.total}")
        logger.info(f"Passed:         {summary.passed}")
        logger.info(f"Failed:         {summary.failed}")
        logger.info(f"Broken:         {summary.broken}")
        logger.info(f"Skipped:        {summary.skipped}")
        logger.info(f"Pass Rate:      {summary.pass_rate:.2f}%")
        logger.info(f"Duration:       {summary.duration_ms / 1000:.2f}s")
        logger.info("=" * 60)
        return summary


__all__ = [
    "attach_json",
    "attach_text",
    "attach_png",
    "attach_failure_context",
    "TestResultSummary",
    "AllureReportProcessor",
]
