"""
Deterministic conversion rules.

Every fixed literal the converter depends on lives here so the
column position, labels and naming stay in one place.
"""

import re

# Decoding
TARGET_ENCODING = "utf-8-sig"
FALLBACK_ENCODINGS = ["cp1252", "latin_1"]
CSV_MEDIA_TYPE = "text/csv"
CSV_SUFFIX = ".csv"
CANDIDATE_DELIMITERS = [",", ";", "\t", "|"]
DEFAULT_DELIMITER = ","

# Metadata column
METADATA_COLUMN_INDEX = 3  # column D
METADATA_HEADER = "data"
DATE_SEPARATOR = "-"

NUMERIC_PATTERN = re.compile(r"-?\d+(\.\d+)?", re.ASCII)

ALLOWED_LOCATIONS = ("Escola", "Esquina", "Arena")

# Workbook
SHEET_NAME = "Dados Coleta"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
FILE_NAME_TEMPLATE = "coleta da {location} no dia {date}.xlsx"
