"""
Print the summary an add-summary block produces over a vault.

Example:
  python scripts/summarize.py --vault ./vault --directive "tags: #project"
  python scripts/summarize.py --vault ./vault --note Projects/overview.md
"""

import argparse
import logging
import sys
from pathlib import Path

# Ensure repo root on path when invoked as a script (python scripts/summarize.py ...)
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tagsummary.domain import build_summary, expand_note, vault_corpus
from tagsummary.schemas import FormatOptions
from tagsummary.settings_store import load_settings


def load_directive(path: Path | None, inline_text: str | None) -> str:
    if inline_text:
        return inline_text.replace("\\n", "\n")
    if path is None:
        return ""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def main() -> None:
    parser = argparse.ArgumentParser(description="Aggregate tagged lines from a vault into one markdown summary.")
    parser.add_argument("--vault", default=None, help="Vault directory (defaults to VAULT_PATH)")
    parser.add_argument("--directive", type=str, help='Inline directive body, e.g. "tags: #a\\nexclude: #b"')
    parser.add_argument("--directive-file", dest="directive_file", type=Path, help="File holding a directive body")
    parser.add_argument("--note", type=str, help="Expand every add-summary block of this note instead")
    parser.add_argument("--no-link", dest="no_link", action="store_true", help="Omit the Source back-link")
    parser.add_argument("--no-callout", dest="no_callout", action="store_true", help="Do not wrap fragments in callouts")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline progress")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    settings = load_settings()
    options = FormatOptions(
        include_link=settings.include_link and not args.no_link,
        include_callout=settings.include_callout and not args.no_callout,
    )
    corpus = vault_corpus(args.vault)

    if args.note:
        try:
            ref = corpus.note_ref(args.note)
        except (ValueError, FileNotFoundError) as exc:
            raise SystemExit(f"Cannot open note {args.note}: {exc}")
        print(expand_note(corpus.read_text(ref), corpus, options))
        return

    source = load_directive(args.directive_file, args.directive)
    if not source.strip():
        raise SystemExit("Provide --directive, --directive-file or --note.")

    result = build_summary(corpus, source, options)
    if result.empty:
        print(result.message)
        return
    sys.stdout.write(result.markdown)


if __name__ == "__main__":
    main()
