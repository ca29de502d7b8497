"""Input/output: JSON configuration and result files."""

from smeared_concrete.io.json_io import load_json_input, save_json_output, write_csv

__all__ = ["load_json_input", "save_json_output", "write_csv"]
