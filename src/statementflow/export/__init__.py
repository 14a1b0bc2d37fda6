"""Statement output writers."""
from .writer import results_to_json, write_csv, write_csv_rows, write_json

__all__ = ["results_to_json", "write_csv", "write_csv_rows", "write_json"]
