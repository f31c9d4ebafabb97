"""HTML page routes for the Tag Summary UI."""

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

from tagsummary.domain import expand_note, vault_corpus
from tagsummary.rendering import render_index_page, render_summary_page
from tagsummary.schemas import SummaryResult
from tagsummary.settings_store import format_options

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    """Render the landing page with the notes in the vault."""
    return render_index_page(request, vault_corpus().list_documents())


@router.get("/notes/{path:path}", response_class=HTMLResponse)
def note_page(path: str, request: Request):
    """Render a note with its add-summary blocks expanded."""
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
    result = SummaryResult(markdown=markdown, empty=not markdown.strip())
    if result.empty:
        result = result.model_copy(update={"message": "This note is empty."})
    return render_summary_page(request, ref.display_name, result, base_path=ref.path)
