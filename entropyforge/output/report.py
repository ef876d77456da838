"""
EntropyForge Report Generator
==============================

Machine-readable JSON reports of generated passwords, stand-alone
password grades and uniformity self-test results.

Records are serialised with ``model_dump(mode="json")`` so the
interchange field names (``password``, ``length``, ``complexity``,
``generated_at`` and the ComplexityScore fields) appear unchanged.

References:
    - RFC 8259 (2017). The JavaScript Object Notation (JSON) Data
      Interchange Format.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

from entropyforge import __version__
from entropyforge.core.models import AnalysisRecord, ComplexityScore, UniformityResult


class ForgeReportGenerator:
    """Builds and writes JSON reports.

    Usage::

        reporter = ForgeReportGenerator()
        reporter.generate_json(Path("passwords.json"), command="diceware",
                               records=records)
    """

    def build_report(
        self,
        *,
        command: str,
        records: Optional[Sequence[AnalysisRecord]] = None,
        analysis: Optional[ComplexityScore] = None,
        uniformity: Optional[Sequence[UniformityResult]] = None,
    ) -> dict[str, Any]:
        """Assemble the report document.

        Args:
            command: CLI command (or caller label) that produced the data.
            records: Generated passwords with their grades.
            analysis: Grade of a single caller-supplied password.
            uniformity: Self-test results.

        Returns:
            JSON-ready dictionary; sections without data are omitted.
        """
        report: dict[str, Any] = {
            "report_metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "tool": "entropyforge",
                "command": command,
                "version": __version__,
            },
        }
        if records is not None:
            report["records"] = [r.model_dump(mode="json") for r in records]
        if analysis is not None:
            report["analysis"] = analysis.model_dump(mode="json")
        if uniformity is not None:
            report["uniformity"] = {
                "passed": all(r.passed for r in uniformity),
                "results": [r.model_dump(mode="json") for r in uniformity],
            }
        return report

    def render_json(self, **sections: Any) -> str:
        """Report document as an indented JSON string."""
        return json.dumps(
            self.build_report(**sections),
            indent=2,
            ensure_ascii=False,
            default=str,
        )

    def generate_json(self, output_path: Path, **sections: Any) -> Path:
        """Write the report document to *output_path*.

        Args:
            output_path: Destination file; parent directories are created.
            **sections: Keyword arguments accepted by :meth:`build_report`.

        Returns:
            Path to the written file.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render_json(**sections), encoding="utf-8")
        return output_path
