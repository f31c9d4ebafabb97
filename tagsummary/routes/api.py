"""Public JSON API routes for Tag Summary.

These handlers translate HTTP requests into domain-layer calls and return
validated responses. Keep the logic thin and delegate to the domain package
for corpus access and the summary pipeline.
"""

from typing import List

from fastapi import APIRouter, HTTPException

from tagsummary.domain import build_summary, expand_note, render_directive, vault_corpus
from tagsummary.schemas import (
    DirectiveOut,
    DirectiveRequest,
    NoteOut,
    SummaryRequest,
    SummaryResult,
    SummarySettings,
    SummarySettingsUpdate,
    TagList,
)
from tagsummary.settings_store import format_options, load_settings, update_settings

router = APIRouter(prefix="/api", tags=["api"])


# ---------------- Summaries ----------------

@router.post("/summary", response_model=SummaryResult)
def summary_build(payload: SummaryRequest):
    """Aggregate the vault for one add-summary block body."""
    options = payload.options or format_options()
    return build_summary(vault_corpus(), payload.source, options)


@router.post("/directive", response_model=DirectiveOut)
def directive_render(payload: DirectiveRequest):
    """Build the add-summary block for the selected tags."""
    return {"block": render_directive(payload.include, payload.exclude)}


@router.get("/tags", response_model=TagList)
def tags_list():
    """List every inline tag found in the vault."""
    return {"tags": vault_corpus().list_tags()}


# ---------------- Notes ----------------

@router.get("/notes", response_model=List[NoteOut])
def notes_list():
    """List notes in the vault, sorted by path."""
    return [ref.model_dump() for ref in vault_corpus().list_documents()]


@router.get("/notes/{path:path}", response_model=NoteOut)
def notes_get(path: str):
    """Return a note with each add-summary block replaced by its summary."""
    corpus = vault_corpus()
    try:
        ref = corpus.note_ref(path)
        text = corpus.read_text(ref)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="Note not found")
    except OSError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    markdown = expand_note(text, corpus, format_options())
    return {"path": ref.path, "display_name": ref.display_name, "markdown": markdown}


# ---------------- Settings ----------------

@router.get("/settings", response_model=SummarySettings)
def settings_get():
    """Return the persisted summary toggles."""
    return load_settings()


@router.put("/settings", response_model=SummarySettings)
def settings_update(payload: SummarySettingsUpdate):
    """Update any subset of the summary toggles."""
    return update_settings(payload)
