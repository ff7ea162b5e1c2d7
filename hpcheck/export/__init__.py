"""Export module for engine results."""

from .result_json import ResultJSONExporter, result_to_dict, scenario_to_dict, to_plain

__all__ = ["ResultJSONExporter", "result_to_dict", "scenario_to_dict", "to_plain"]
