"""map_scout.report: сериализация артефактов source maps для CLI."""

from map_scout.report.json_report import artifacts_to_json, render_json

__all__ = ["artifacts_to_json", "render_json"]
