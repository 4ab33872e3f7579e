"""CLI entry point summarizing the JSON report artifacts of a run."""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from e2e_acceptance.report import DEFAULT_REPORT_DIR, ReportArtifact, find_artifacts

STATUS_SYMBOLS = {
    "passed": "✓",
    "failed": "✗",
    "timedOut": "⏱",
    "skipped": "-",
}


def log_results_summary(
    log: logging.Logger, artifacts: Sequence[ReportArtifact]
) -> None:
    """Log a formatted summary of the outcomes in each artifact."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for artifact in artifacts:
        for outcome in artifact.outcomes:
            symbol = STATUS_SYMBOLS.get(outcome.status, "?")
            log.info(
                "%s %s::%s: %s (%dms)",
                symbol,
                artifact.test_file_name,
                outcome.title,
                outcome.status,
                outcome.duration,
            )
            if outcome.attempt > 1:
                log.info("  Attempt: %d", outcome.attempt)
            if outcome.error:
                log.info("  Error: %s", outcome.error.splitlines()[0])


def load_artifacts(
    log: logging.Logger, paths: Sequence[Path]
) -> Sequence[ReportArtifact]:
    """Read artifacts, skipping the ones that cannot be parsed."""
    artifacts: list[ReportArtifact] = []
    for path in paths:
        try:
            artifacts.append(ReportArtifact.read(path))
        except (OSError, ValueError) as e:
            log.warning("Skipping unreadable report %s: %s", path, e)
    return artifacts


def format_output(artifacts: Sequence[ReportArtifact]) -> dict[str, Any]:
    """Format outcomes for JSON output."""
    all_results = [
        outcome.model_dump(mode="json", by_alias=True)
        for artifact in artifacts
        for outcome in artifact.outcomes
    ]

    return {
        "total": len(all_results),
        "passed": sum(1 for r in all_results if r["status"] == "passed"),
        "failed": sum(1 for r in all_results if r["status"] == "failed"),
        "timedOut": sum(1 for r in all_results if r["status"] == "timedOut"),
        "skipped": sum(1 for r in all_results if r["status"] == "skipped"),
        "results": all_results,
    }


def run(report_dir: Path) -> int:
    """Summarize the artifacts in ``report_dir`` and return the exit code."""
    log = logging.getLogger("e2e_acceptance")

    paths = find_artifacts(report_dir)
    if not paths:
        log.info("No report artifacts found in %s", report_dir)
        print(json.dumps(format_output([])))
        return 0

    log.info("Reading %d report artifact(s) from %s", len(paths), report_dir)
    artifacts = load_artifacts(log, paths)

    log_results_summary(log, artifacts)
    print(json.dumps(format_output(artifacts), indent=2))

    has_failures = any(
        outcome.unsuccessful
        for artifact in artifacts
        for outcome in artifact.outcomes
    )
    return 1 if has_failures else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Summarize end-to-end JSON report artifacts"
    )
    parser.add_argument(
        "--report-dir",
        type=Path,
        default=DEFAULT_REPORT_DIR,
        help=f"Directory holding report-*.json files (default: {DEFAULT_REPORT_DIR})",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    sys.exit(run(args.report_dir))


if __name__ == "__main__":  # pragma: no cover
    main()
