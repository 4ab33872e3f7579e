"""Plain-text diagnostic log of scenario steps."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

STEP_LOGGER_NAME = "e2e_acceptance.steps"


class IsoTimestampFormatter(logging.Formatter):
    """Formatter stamping records with a UTC ISO-8601 timestamp."""

    def formatTime(  # noqa: N802
        self, record: logging.LogRecord, datefmt: str | None = None
    ) -> str:
        """Return the record creation time as ``2024-01-31T12:00:00.000Z``."""
        created = datetime.fromtimestamp(record.created, UTC)
        return created.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True, kw_only=True)
class StepLog:
    """Append-only step log shared by the page objects of a run.

    Each step is one ``<timestamp> - <message>`` line. Page HTML snapshots
    are appended verbatim for debugging dropdown interactions.
    """

    logger: logging.Logger
    handler: logging.Handler

    @classmethod
    def open(cls, path: Path) -> "StepLog":
        """Attach an append-mode file handler for ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        handler.setFormatter(IsoTimestampFormatter("%(asctime)s - %(message)s"))

        logger = logging.getLogger(STEP_LOGGER_NAME)
        logger.setLevel(logging.INFO)
        # Steps and page HTML go to the step log only, not to captured output
        logger.propagate = False
        logger.addHandler(handler)
        return cls(logger=logger, handler=handler)

    def step(self, message: str, *args: object) -> None:
        """Record one scenario step."""
        self.logger.info(message, *args)

    def page_snapshot(self, label: str, html: str) -> None:
        """Record the full page HTML under a label."""
        self.logger.info("\nPage content %s:\n%s\n", label, html)

    def close(self) -> None:
        """Detach and close the file handler."""
        self.logger.removeHandler(self.handler)
        self.handler.close()
