"""Utility functions for data formatting"""

import pandas as pd

from station_pipeline.inference import field_unit


class DataFormatter:
    """Utility class for formatting station data for display"""

    @staticmethod
    def format_number(value, decimal_places=2):
        """Format a number with specified decimal places"""
        if value is None or isinstance(value, bool) or not isinstance(value, (int, float)) or pd.isna(value):
            return "N/A"
        return f"{value:.{decimal_places}f}"

    @staticmethod
    def format_column_label(name):
        """'wind_speed' -> 'Wind speed'"""
        if not name:
            return ""
        return (name[0].upper() + name[1:]).replace("_", " ")

    @staticmethod
    def format_with_unit(value, column, decimal_places=2):
        text = DataFormatter.format_number(value, decimal_places)
        unit = field_unit(column)
        if text == "N/A" or not unit:
            return text
        return f"{text} {unit}"

    @staticmethod
    def format_summary_for_display(summary):
        """Format a `summarize_columns` table for stat cards"""
        if summary is None or summary.empty:
            return None

        formatted = pd.DataFrame(index=[DataFormatter.format_column_label(c) for c in summary.index])
        for stat in ("mean", "min", "max"):
            formatted[stat] = [
                DataFormatter.format_with_unit(summary.at[c, stat], c) for c in summary.index
            ]
        formatted["change"] = [
            DataFormatter.format_number(abs(v), 1) + "%" if not pd.isna(v) else "N/A"
            for v in summary["change"]
        ]
        formatted["trend"] = list(summary["trend"])
        return formatted
