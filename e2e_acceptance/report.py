"""Report artifacts: one JSON document per test source file."""

import json
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from e2e_acceptance.errors import ReportWriteError
from e2e_acceptance.models.outcome import TestOutcome

DEFAULT_REPORT_DIR = Path("test-results") / "json"
REPORT_PREFIX = "report-"
REPORT_SUFFIX = ".json"

_OUTCOMES = TypeAdapter(list[TestOutcome])


@dataclass(frozen=True, kw_only=True)
class ReportArtifact:
    """Ordered outcomes of the tests declared in one source file."""

    test_file_name: str
    outcomes: Sequence[TestOutcome]

    @property
    def file_name(self) -> str:
        """Artifact file name derived from the source file base name."""
        return f"{REPORT_PREFIX}{self.test_file_name}{REPORT_SUFFIX}"

    def to_json(self) -> str:
        """Serialize outcomes as a JSON array, in completion order."""
        return json.dumps(
            [
                outcome.model_dump(mode="json", by_alias=True)
                for outcome in self.outcomes
            ],
            indent=2,
        )

    def write(self, output_dir: Path) -> Path:
        """Write the artifact, replacing any previous one for the same file.

        Args:
            output_dir: Directory to write into, created with its ancestors
                if missing

        Returns:
            Path of the written artifact

        Raises:
            ReportWriteError: If the directory or the file cannot be written

        """
        path = output_dir / self.file_name
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(self.to_json(), encoding="utf-8")
        except OSError as e:
            raise ReportWriteError(f"Error writing report file {path}: {e}") from e
        return path

    @classmethod
    def read(cls, path: Path) -> "ReportArtifact":
        """Load a previously written artifact.

        Raises:
            FileNotFoundError: If the artifact does not exist
            ValueError: If the artifact is not a valid outcome array

        """
        try:
            outcomes = _OUTCOMES.validate_json(path.read_bytes())
        except ValidationError as e:
            raise ValueError(f"Invalid report artifact {path}: {e}") from e

        name = path.name.removeprefix(REPORT_PREFIX).removesuffix(REPORT_SUFFIX)
        return cls(test_file_name=name, outcomes=outcomes)


def find_artifacts(report_dir: Path) -> Sequence[Path]:
    """Return report artifacts in a directory, sorted by name."""
    if not report_dir.is_dir():
        return []
    return sorted(report_dir.glob(f"{REPORT_PREFIX}*{REPORT_SUFFIX}"))
