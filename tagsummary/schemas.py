from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# ---------------- Corpus ----------------

class TagOccurrence(BaseModel):
    """Position of one inline tag inside a note (0-based line indexes)."""
    model_config = ConfigDict(frozen=True)

    tag: str
    start_line: int = Field(ge=0)
    end_line: int = Field(ge=0)


class DocumentRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str                       # POSIX path relative to the vault root
    display_name: str               # file name without ".md"


class Document(BaseModel):
    """
    Read-only snapshot of one note as seen by the summary pipeline.

    `lines` may be empty for stub documents built from metadata only; the
    pipeline loads content for selected documents afterwards.
    """
    model_config = ConfigDict(frozen=True)

    path: str
    display_name: str
    lines: Tuple[str, ...] = ()
    occurrences: Tuple[TagOccurrence, ...] = ()
    excluded_by_self: bool = False

    @property
    def ref(self) -> DocumentRef:
        return DocumentRef(path=self.path, display_name=self.display_name)


# ---------------- Query ----------------

class Query(BaseModel):
    """Tag sets parsed from one directive block."""
    model_config = ConfigDict(frozen=True)

    include_or: Tuple[str, ...] = ()     # "tags:" line
    include_and: Tuple[str, ...] = ()    # "include:" line
    exclude: Tuple[str, ...] = ()        # "exclude:" line

    @property
    def valid_tags(self) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(self.include_or + self.include_and))

    @property
    def is_empty(self) -> bool:
        return not self.valid_tags


class DirectiveBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    body: str
    start_line: int     # line of the opening fence
    end_line: int       # line of the closing fence


# ---------------- Formatting ----------------

class Fragment(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    source_tag: str


class FormatOptions(BaseModel):
    include_link: bool = True
    include_callout: bool = True


class SummarySettings(BaseModel):
    """Persisted toggles. `remove_tags` and `include_children` are stored but not applied yet."""
    include_link: bool = True
    include_callout: bool = True
    remove_tags: bool = False
    include_children: bool = True


class SummarySettingsUpdate(BaseModel):
    include_link: Optional[bool] = None
    include_callout: Optional[bool] = None
    remove_tags: Optional[bool] = None
    include_children: Optional[bool] = None


# ---------------- API payloads ----------------

class SummaryRequest(BaseModel):
    source: str = Field(description="Body of an add-summary block")
    options: Optional[FormatOptions] = None


class SummaryResult(BaseModel):
    markdown: str = ""
    empty: bool = True
    message: Optional[str] = None
    fragment_count: int = 0
    document_count: int = 0


class DirectiveRequest(BaseModel):
    include: str = Field(min_length=1)
    exclude: Optional[str] = None


class DirectiveOut(BaseModel):
    block: str


class NoteOut(BaseModel):
    path: str
    display_name: str
    markdown: Optional[str] = None


class TagList(BaseModel):
    tags: List[str] = Field(default_factory=list)
