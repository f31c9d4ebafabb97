"""
Corpus access for the summary pipeline.

The pipeline only talks to a `CorpusProvider`; `VaultCorpus` is the
filesystem-backed implementation over a directory of markdown notes.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

import yaml

from tagsummary.domain.tags import find_tag_occurrences
from tagsummary.schemas import DocumentRef, TagOccurrence

logger = logging.getLogger(__name__)

VAULT_PATH = os.getenv("VAULT_PATH", "./vault")

EXCLUDE_PROPERTY = "exclude-tag-summary"
NOTE_SUFFIX = ".md"


class NoteReadError(OSError):
    """A note exists but its content cannot be decoded."""


class CorpusProvider(Protocol):
    def list_documents(self) -> Sequence[DocumentRef]: ...

    def load_content(self, ref: DocumentRef) -> Sequence[str]: ...

    def load_tag_occurrences(self, ref: DocumentRef) -> Sequence[TagOccurrence]: ...

    def is_excluded(self, ref: DocumentRef) -> bool: ...


def split_lines(text: str) -> List[str]:
    return text.split("\n")


def parse_front_matter(lines: Sequence[str]) -> Dict[str, Any]:
    """Return the YAML front matter of a note, or an empty dict when absent or invalid."""
    if not lines or lines[0].strip() != "---":
        return {}
    for idx in range(1, len(lines)):
        if lines[idx].strip() in ("---", "..."):
            raw = "\n".join(lines[1:idx])
            try:
                data = yaml.safe_load(raw)
            except yaml.YAMLError:
                logger.warning("Vault corpus: unreadable front matter; ignoring")
                return {}
            return data if isinstance(data, dict) else {}
    return {}


def is_excluded_property(front_matter: Dict[str, Any]) -> bool:
    value = front_matter.get(EXCLUDE_PROPERTY)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true" if value is not None else False


@dataclass
class _NoteMetadata:
    mtime_ns: int
    occurrences: Tuple[TagOccurrence, ...]
    excluded: bool


@dataclass
class VaultCorpus:
    """Markdown notes under `root`, addressed by POSIX paths relative to it."""

    root: Path
    _cache: Dict[str, _NoteMetadata] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self.root = Path(self.root)

    def resolve(self, path: str) -> Path:
        root = self.root.resolve()
        target = (root / path).resolve()
        if target != root and root not in target.parents:
            raise ValueError(f"Note path escapes the vault: {path}")
        return target

    def ref_for(self, path: str) -> DocumentRef:
        target = self.resolve(path)
        rel = target.relative_to(self.root.resolve()).as_posix()
        name = target.name
        if name.endswith(NOTE_SUFFIX):
            name = name[: -len(NOTE_SUFFIX)]
        return DocumentRef(path=rel, display_name=name)

    def note_ref(self, path: str) -> DocumentRef:
        """Ref for an existing note; `FileNotFoundError` when there is none."""
        ref = self.ref_for(path)
        if not self.resolve(ref.path).is_file():
            raise FileNotFoundError(path)
        return ref

    def list_documents(self) -> List[DocumentRef]:
        if not self.root.is_dir():
            logger.warning("Vault corpus: %s is not a directory", self.root)
            return []
        refs: List[DocumentRef] = []
        for p in self.root.rglob(f"*{NOTE_SUFFIX}"):
            if not p.is_file():
                continue
            try:
                refs.append(self.ref_for(p.relative_to(self.root).as_posix()))
            except ValueError:
                logger.warning("Vault corpus: %s links outside the vault; skipping", p)
        refs.sort(key=lambda r: r.path)
        return refs

    def read_text(self, ref: DocumentRef) -> str:
        try:
            return self.resolve(ref.path).read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise NoteReadError(f"{ref.path} is not valid UTF-8") from exc

    def load_content(self, ref: DocumentRef) -> List[str]:
        return split_lines(self.read_text(ref))

    def _metadata(self, ref: DocumentRef) -> _NoteMetadata:
        target = self.resolve(ref.path)
        mtime_ns = target.stat().st_mtime_ns
        cached = self._cache.get(ref.path)
        if cached and cached.mtime_ns == mtime_ns:
            return cached

        lines = self.load_content(ref)
        meta = _NoteMetadata(
            mtime_ns=mtime_ns,
            occurrences=tuple(find_tag_occurrences(lines)),
            excluded=is_excluded_property(parse_front_matter(lines)),
        )
        self._cache[ref.path] = meta
        return meta

    def load_tag_occurrences(self, ref: DocumentRef) -> Tuple[TagOccurrence, ...]:
        return self._metadata(ref).occurrences

    def is_excluded(self, ref: DocumentRef) -> bool:
        return self._metadata(ref).excluded

    def list_tags(self) -> List[str]:
        """Every distinct inline tag in the vault, sorted."""
        tags = set()
        for ref in self.list_documents():
            try:
                tags.update(occ.tag for occ in self.load_tag_occurrences(ref))
            except OSError:
                logger.warning("Vault corpus: could not read %s", ref.path)
        return sorted(tags)


_corpora: Dict[Path, VaultCorpus] = {}


def vault_corpus(root: Optional[str] = None) -> VaultCorpus:
    """Shared provider for a vault root, so its metadata cache outlives one request."""
    path = Path(root or VAULT_PATH)
    key = path.resolve()
    corpus = _corpora.get(key)
    if corpus is None:
        corpus = _corpora.setdefault(key, VaultCorpus(path))
    return corpus
