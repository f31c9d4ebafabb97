"""
Seed a demo vault with tagged notes and a note holding an add-summary block.

Usage:
  python scripts/create_demo_vault.py --path ./vault
"""
import argparse
import sys
from pathlib import Path

# Ensure repo root on path when invoked as a script (python scripts/create_demo_vault.py ...)
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tagsummary.domain import render_directive

NOTES = {
    "Projects/alpha.md": (
        "# Alpha\n"
        "Kick-off moved to Monday #project/alpha ^kickoff\n"
        "**Budget** approved by finance #project/alpha/budget\n"
        "Unrelated thought #idea\n"
    ),
    "Projects/beta.md": (
        "# Beta\n"
        "Beta needs a second reviewer #project/beta #review\n"
        "Draft is still private #project/beta #private\n"
    ),
    "Journal/2024-05-01.md": (
        "---\n"
        "exclude-tag-summary: true\n"
        "---\n"
        "Private musing about alpha #project/alpha\n"
    ),
    "Ideas.md": (
        "Try hierarchical tags everywhere #idea/tags\n"
        "An #ideas tag is not part of #idea\n"
    ),
}


def seed_vault(root: Path, overwrite: bool) -> list[Path]:
    written: list[Path] = []
    notes = dict(NOTES)
    notes["Overview.md"] = "# Overview\n\n" + render_directive("#project", "#private")
    for rel, text in notes.items():
        dest = root / rel
        if dest.exists() and not overwrite:
            continue
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(text, encoding="utf-8")
        written.append(dest)
    return written


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a small demo vault.")
    parser.add_argument("--path", type=Path, default=Path("./vault"), help="Vault directory to create")
    parser.add_argument("--overwrite", action="store_true", help="Replace notes that already exist")
    args = parser.parse_args()

    written = seed_vault(args.path, args.overwrite)
    print(f"Wrote {len(written)} note(s) to {args.path}")


if __name__ == "__main__":
    main()
