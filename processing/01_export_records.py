"""
01_export_records.py
--------------------
Generates the synthetic record set and writes it in the download
schema (year,month,region,crimeType,incidentCount) so the full dataset
can be inspected or loaded elsewhere without running the dashboard.

Outputs:
    data/processed/crime_records.csv

Run from project root (after `pip install -e .`):
    python processing/01_export_records.py
"""

import os

from crimelens.aggregations import export_csv
from crimelens.generator import expected_record_count, generate_crime_data

OUT_DIR  = os.path.join("data", "processed")
OUT_FILE = "crime_records.csv"


def main(out_dir: str = OUT_DIR):
    print("01_export_records.py")
    print("=" * 50)

    print("Generating crime records...")
    records = generate_crime_data()
    expected = expected_record_count()
    if len(records) != expected:
        raise RuntimeError(
            f"Generated {len(records):,} records, expected {expected:,}. "
            "Check CUTOFF_MONTH and the enumerations in crimelens/constants.py."
        )
    print(f"  {len(records):,} records")

    os.makedirs(out_dir, exist_ok=True)

    print(f"  Building {OUT_FILE}...")
    path = os.path.join(out_dir, OUT_FILE)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(export_csv(records))
    print(f"    ✓ {len(records):,} rows")

    print(f"\n✓ Record export written to {path}")


if __name__ == "__main__":
    main()
