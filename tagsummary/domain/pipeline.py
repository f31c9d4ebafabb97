"""Summary pipeline: directive -> selection -> extraction -> formatting -> aggregation."""

import logging
from typing import List, Optional, Sequence

from tagsummary.domain.aggregate import aggregate
from tagsummary.domain.corpus import CorpusProvider, split_lines
from tagsummary.domain.extraction import extract_fragments_raw
from tagsummary.domain.formatting import format_fragment
from tagsummary.domain.query import find_directive_blocks, parse_directive
from tagsummary.domain.selection import select_documents
from tagsummary.schemas import Document, FormatOptions, Fragment, Query, SummaryResult

logger = logging.getLogger(__name__)

EMPTY_SUMMARY_MESSAGE = "There are no blocks that match the specified tags."


def collect_fragments(documents: Sequence[Document], query: Query, options: FormatOptions) -> List[Fragment]:
    """Extract and format fragments from documents that are already selected and loaded."""
    fragments: List[Fragment] = []
    for doc in documents:
        for raw_line, tag in extract_fragments_raw(doc, query.valid_tags):
            fragments.append(format_fragment(raw_line, tag, doc, options))
    return fragments


def summarize_documents(documents: Sequence[Document], query: Query, options: FormatOptions) -> str:
    """
    Run the pipeline over an in-memory snapshot.

    `documents` must already be in path order; that order is the tie-break for
    fragments sharing a tag.
    """
    if query.is_empty:
        return ""
    selected = select_documents(documents, query)
    return aggregate(collect_fragments(selected, query, options))


def _stub_documents(corpus: CorpusProvider) -> List[Document]:
    refs = sorted(corpus.list_documents(), key=lambda r: r.path)
    stubs: List[Document] = []
    for ref in refs:
        try:
            occurrences = tuple(corpus.load_tag_occurrences(ref))
            excluded = corpus.is_excluded(ref)
        except OSError:
            logger.warning("Summary pipeline: could not read metadata for %s; omitting", ref.path)
            continue
        stubs.append(
            Document(
                path=ref.path,
                display_name=ref.display_name,
                occurrences=occurrences,
                excluded_by_self=excluded,
            )
        )
    return stubs


def _load_documents(corpus: CorpusProvider, stubs: Sequence[Document]) -> List[Document]:
    loaded: List[Document] = []
    for stub in stubs:
        try:
            lines = tuple(corpus.load_content(stub.ref))
        except OSError:
            logger.warning("Summary pipeline: could not read %s; omitting", stub.path)
            continue
        loaded.append(stub.model_copy(update={"lines": lines}))
    return loaded


def build_summary(corpus: CorpusProvider, source: str, options: Optional[FormatOptions] = None) -> SummaryResult:
    """
    Build the aggregate markdown for one add-summary block.

    Content is read sequentially, and only for documents the query selects.
    An empty query and an empty aggregate both produce the placeholder result.
    """
    options = options or FormatOptions()
    query = parse_directive(source)
    if query.is_empty:
        logger.info("Summary pipeline: directive names no tags")
        return SummaryResult(empty=True, message=EMPTY_SUMMARY_MESSAGE)

    selected = select_documents(_stub_documents(corpus), query)
    documents = _load_documents(corpus, selected)
    fragments = collect_fragments(documents, query, options)
    markdown = aggregate(fragments)

    logger.info(
        "Summary pipeline: %d fragment(s) from %d document(s) for %s",
        len(fragments),
        len(documents),
        ", ".join(query.valid_tags),
    )
    if not markdown:
        return SummaryResult(empty=True, message=EMPTY_SUMMARY_MESSAGE)
    return SummaryResult(
        markdown=markdown,
        empty=False,
        fragment_count=len(fragments),
        document_count=len(documents),
    )


def expand_note(text: str, corpus: CorpusProvider, options: Optional[FormatOptions] = None) -> str:
    """Replace every add-summary block of a note with its summary (or the placeholder)."""
    blocks = find_directive_blocks(text)
    if not blocks:
        return text

    lines = split_lines(text)
    out: List[str] = []
    cursor = 0
    for block in blocks:
        out.extend(lines[cursor:block.start_line])
        result = build_summary(corpus, block.body, options)
        if result.empty:
            out.append(result.message or EMPTY_SUMMARY_MESSAGE)
        else:
            out.append(result.markdown.rstrip("\n"))
        cursor = block.end_line + 1
    out.extend(lines[cursor:])
    return "\n".join(out)
