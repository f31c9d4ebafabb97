"""
Pytest fixtures shared by the test suite.

`StaticCorpus` is an in-memory corpus provider; `vault` writes real notes to a
temporary directory for the filesystem provider and the API.
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set

import pytest

from tagsummary.schemas import Document, DocumentRef, TagOccurrence


def occ(tag: str, line: int) -> TagOccurrence:
    return TagOccurrence(tag=tag, start_line=line, end_line=line)


def make_doc(
    path: str,
    lines: Sequence[str],
    occurrences: Sequence[TagOccurrence] = (),
    excluded: bool = False,
) -> Document:
    name = Path(path).name
    return Document(
        path=path,
        display_name=name[:-3] if name.endswith(".md") else name,
        lines=tuple(lines),
        occurrences=tuple(occurrences),
        excluded_by_self=excluded,
    )


class StaticCorpus:
    """Corpus provider over prepared documents, recording content reads."""

    def __init__(self, documents: Sequence[Document], unreadable: Optional[Set[str]] = None):
        self._docs: Dict[str, Document] = {d.path: d for d in documents}
        self._unreadable = unreadable or set()
        self.content_reads: List[str] = []

    def list_documents(self) -> List[DocumentRef]:
        # Deliberately unsorted; the pipeline owns ordering
        return [d.ref for d in reversed(list(self._docs.values()))]

    def load_content(self, ref: DocumentRef) -> List[str]:
        self.content_reads.append(ref.path)
        if ref.path in self._unreadable:
            raise OSError(f"cannot read {ref.path}")
        return list(self._docs[ref.path].lines)

    def load_tag_occurrences(self, ref: DocumentRef) -> List[TagOccurrence]:
        return list(self._docs[ref.path].occurrences)

    def is_excluded(self, ref: DocumentRef) -> bool:
        return self._docs[ref.path].excluded_by_self


@pytest.fixture
def two_doc_corpus() -> StaticCorpus:
    return StaticCorpus([
        make_doc("doc1.md", ["First line"], [occ("#project/x", 0)]),
        make_doc("doc2.md", ["Second line"], [occ("#project/y", 0)]),
    ])


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    notes = {
        "Projects/alpha.md": "# Alpha\nKick-off on Monday #project/alpha ^kickoff\n",
        "Projects/beta.md": "Needs review #project/beta #review\nPrivate draft #project/beta #private\n",
        "Journal/day.md": "---\nexclude-tag-summary: true\n---\nSecret #project/alpha\n",
        "Overview.md": "# Overview\n\n```add-summary\ntags: #project\nexclude: #private\n```\n\nEnd\n",
        "Ideas.md": "An #ideas line\n",
    }
    for rel, text in notes.items():
        dest = root / rel
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(text, encoding="utf-8")
    return root
