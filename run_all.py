"""
run_all.py
----------
Runs the CrimeLens MX processing scripts in order, each in its own
interpreter, stopping at the first failure.

    python run_all.py              # every script
    python run_all.py --from 02    # 02 onwards
    python run_all.py --only 01    # just 01

Outputs land in data/processed/. The dashboard does not read them; they
are snapshots of the same views for reporting and diffing.
"""

import argparse
import subprocess
import sys
import time

SCRIPTS = [
    ("01", "processing/01_export_records.py"),
    ("02", "processing/02_precompute_summary.py"),
]


def select_scripts(from_script: str | None, only_scripts: list[str] | None) -> list[tuple[str, str]]:
    """
    Resolve --from / --only into the scripts to run. Unknown --only
    numbers are reported and skipped.

    Raises:
        SystemExit: --from names a script number that does not exist.
    """
    numbers = [n for n, _ in SCRIPTS]

    if only_scripts:
        unknown = sorted(set(only_scripts) - set(numbers))
        if unknown:
            print(f"Warning: no script numbered {', '.join(unknown)}")
        return [(n, p) for n, p in SCRIPTS if n in only_scripts]

    if from_script:
        if from_script not in numbers:
            print(f"Error: no script numbered '{from_script}'. Choose from {', '.join(numbers)}.")
            sys.exit(1)
        return SCRIPTS[numbers.index(from_script):]

    return SCRIPTS


def run_script(number: str, path: str) -> bool:
    """Run one script with the current interpreter; True if it exited 0."""
    print(f"\n{'=' * 60}\n  [{number}] {path}\n{'=' * 60}")
    start = time.time()
    returncode = subprocess.run([sys.executable, path]).returncode
    elapsed = time.time() - start

    if returncode:
        print(f"\n  ✗ {path} exited with {returncode} after {elapsed:.1f}s")
        return False
    print(f"\n  ✓ {path} finished in {elapsed:.1f}s")
    return True


def print_summary(scripts: list[tuple[str, str]], results: dict, elapsed: float):
    print(f"\n{'=' * 60}\n  Pipeline summary ({elapsed:.1f}s)\n{'=' * 60}")
    for number, path in scripts:
        status = results.get(number)
        icon = "-" if status is None else ("✓" if status else "✗")
        print(f"  {icon} [{number}] {path}")


def main():
    parser = argparse.ArgumentParser(description="Run the CrimeLens MX processing scripts")
    parser.add_argument("--from", dest="from_script", metavar="N",
                        help="start at script N, e.g. --from 02")
    parser.add_argument("--only", dest="only_scripts", metavar="N", nargs="+",
                        help="run only the listed script numbers")
    args = parser.parse_args()

    scripts = select_scripts(args.from_script, args.only_scripts)
    if not scripts:
        print("Nothing to run.")
        return

    start = time.time()
    results = {}
    for number, path in scripts:
        results[number] = run_script(number, path)
        if not results[number]:
            print(f"\nStopped at {number}. Resume with:  python run_all.py --from {number}")
            break

    print_summary(scripts, results, time.time() - start)

    if not all(results.values()):
        sys.exit(1)
    print(f"\n  {len(results)} script(s) completed. Outputs are in data/processed/.")


if __name__ == "__main__":
    main()
