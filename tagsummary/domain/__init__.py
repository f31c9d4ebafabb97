"""
Domain layer: tag queries, corpus access, and the summary pipeline.

This package is intentionally free of web framework dependencies so it can be
reused by the scripts as well as the API.
"""

from .aggregate import aggregate, tag_sort_key
from .corpus import CorpusProvider, VaultCorpus, vault_corpus
from .extraction import extract_fragments_raw
from .formatting import find_block_anchor, find_bold_alias, format_fragment
from .pipeline import EMPTY_SUMMARY_MESSAGE, build_summary, expand_note, summarize_documents
from .query import find_directive_blocks, parse_directive, render_directive
from .selection import document_satisfies, select_documents
from .tags import find_tag_occurrences, is_valid_tag, matches

__all__ = [
    "EMPTY_SUMMARY_MESSAGE",
    "CorpusProvider",
    "VaultCorpus",
    "aggregate",
    "build_summary",
    "document_satisfies",
    "expand_note",
    "extract_fragments_raw",
    "find_block_anchor",
    "find_bold_alias",
    "find_directive_blocks",
    "find_tag_occurrences",
    "format_fragment",
    "is_valid_tag",
    "matches",
    "parse_directive",
    "render_directive",
    "select_documents",
    "summarize_documents",
    "tag_sort_key",
    "vault_corpus",
]
