"""
Result JSON exporter.

Converts engine results into plain JSON documents for the UI and report
layers: dataclasses become dicts, enums their values, dates ISO strings.
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any

from rich.console import Console

from ..engine import SimulationResult
from ..roi import ScenarioResult

console = Console(stderr=True)


def to_plain(obj: Any) -> Any:
    """Recursively serialize object for JSON."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_plain(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, dict):
        return {k: to_plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_plain(item) for item in obj]
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    return obj


def result_to_dict(result: SimulationResult) -> dict[str, Any]:
    """
    Plain document for a simulation result.

    ``score`` is null when no metered consumption was supplied.
    """
    data = to_plain(result)
    data["climate_region"] = result.climate_region
    return data


def scenario_to_dict(scenario: ScenarioResult) -> dict[str, Any]:
    data = to_plain(scenario)
    data["efficiency_gain_percent"] = round(scenario.efficiency_gain_percent, 1)
    return data


class ResultJSONExporter:
    """
    Write results to JSON files.

    Usage:
        ResultJSONExporter().export(result, "out/result.json")
    """

    def __init__(self, pretty: bool = True):
        self.pretty = pretty

    def dumps(self, data: dict[str, Any]) -> str:
        if self.pretty:
            return json.dumps(data, indent=2, ensure_ascii=False)
        return json.dumps(data, ensure_ascii=False)

    def export(self, result: SimulationResult, output_path: Path | str) -> Path:
        """
        Export a simulation result.

        Args:
            result: Engine result
            output_path: Output file path

        Returns:
            Path to exported file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.dumps(result_to_dict(result)), encoding="utf-8")
        console.print(f"[green]Exported result JSON: {output_path}[/green]")
        return output_path
