"""FastAPI application for the Character Concept Generator web interface."""

from __future__ import annotations

from typing import Annotated

from fastapi import FastAPI, File, HTTPException, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, StreamingResponse

from conceptsheet.backend.generation_service import generation_service
from conceptsheet.backend.image_handler import image_handler
from conceptsheet.backend.schemas import (
    CatalogResponse,
    ChromaItem,
    ImageUploadResponse,
    ResultItem,
    SelectionsRequest,
    SessionResponse,
    SessionStateResponse,
    StyleItem,
    ViewItem,
)
from conceptsheet.backend.session_manager import Session, session_manager
from conceptsheet.core.archive import CharacterSheetArchive
from conceptsheet.core.catalog import CHARACTER_VIEWS, AspectRatio, ChromaColor, Style
from conceptsheet.core.config import (
    configure_logging,
    get_api_host,
    get_api_port,
    get_max_image_size_mb,
)
from conceptsheet.core.errors import InvalidTransitionError, UploadValidationError
from conceptsheet.core.schemas import Screen

configure_logging()

app = FastAPI(
    title="Character Concept Generator API",
    description="Three-view character concept sheets from a single photo",
    version="1.0.0",
)

# Add CORS middleware for Streamlit
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Helper Functions
# ============================================================================


def get_session_or_404(session_id: str) -> Session:
    """Get session or raise 404."""
    session = session_manager.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def session_snapshot(session: Session) -> SessionStateResponse:
    state = session.state
    return SessionStateResponse(
        session_id=session.session_id,
        screen=state.screen,
        has_image=state.image is not None,
        filename=state.image.filename if state.image else None,
        style=state.style,
        aspect_ratio=state.aspect_ratio,
        chroma=state.chroma,
        can_generate=state.can_generate,
        error=state.error,
        progress=state.progress,
        result_count=len(state.results),
    )


# ============================================================================
# Catalog Endpoints
# ============================================================================


@app.get("/catalog", response_model=CatalogResponse)
async def get_catalog():
    """List the styles, ratios, backgrounds and views on offer."""
    return CatalogResponse(
        styles=[
            StyleItem(key=style, display_name=style.display_name, prompt=style.prompt)
            for style in Style
        ],
        aspect_ratios=list(AspectRatio),
        chroma_colors=[
            ChromaItem(key=chroma, display_name=chroma.display_name, hex_value=chroma.hex_value)
            for chroma in ChromaColor
        ],
        views=[ViewItem(name=view.display_name, pose=view.pose) for view in CHARACTER_VIEWS],
        max_upload_mb=get_max_image_size_mb(),
    )


# ============================================================================
# Session Endpoints
# ============================================================================


@app.post("/sessions", response_model=SessionResponse)
async def create_session():
    """Create a new session."""
    session = session_manager.create_session()
    return SessionResponse(
        session_id=session.session_id,
        created_at=session.created_at.isoformat(),
    )


@app.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    """Delete a session and cleanup files."""
    if session_manager.cleanup_session(session_id):
        return {"status": "deleted"}
    raise HTTPException(status_code=404, detail="Session not found")


@app.get("/sessions/{session_id}", response_model=SessionStateResponse)
async def get_session(session_id: str):
    """Get the session's screen, selections, error and progress."""
    return session_snapshot(get_session_or_404(session_id))


@app.post("/sessions/{session_id}/reset", response_model=SessionStateResponse)
async def reset_session(session_id: str):
    """Clear selections, results and error and release the preview."""
    session = get_session_or_404(session_id)
    try:
        session.state.reset()
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return session_snapshot(session)


# ============================================================================
# Selection Endpoints
# ============================================================================


@app.post("/sessions/{session_id}/image", response_model=ImageUploadResponse)
async def upload_image(session_id: str, file: Annotated[UploadFile, File()]):
    """Upload the character photo for the session."""
    session = get_session_or_404(session_id)

    try:
        image = await image_handler.process_upload(session, file)
    except UploadValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return ImageUploadResponse(
        filename=image.filename,
        mime_type=image.mime_type,
        size=image.size,
    )


@app.get("/sessions/{session_id}/image")
async def get_image_preview(session_id: str):
    """Get the preview of the uploaded photo."""
    session = get_session_or_404(session_id)
    path = session.preview_path()
    if path is None or not path.exists():
        raise HTTPException(status_code=404, detail="No image uploaded")
    return FileResponse(path, media_type=session.state.image.mime_type)


@app.put("/sessions/{session_id}/selections", response_model=SessionStateResponse)
async def update_selections(session_id: str, request: SelectionsRequest):
    """Set any of style, aspect ratio and background."""
    session = get_session_or_404(session_id)
    state = session.state

    try:
        if request.style is not None:
            state.select_style(request.style)
        if request.aspect_ratio is not None:
            state.select_aspect_ratio(request.aspect_ratio)
        if request.chroma is not None:
            state.select_chroma(request.chroma)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return session_snapshot(session)


# ============================================================================
# Generation Endpoints
# ============================================================================


@app.post("/sessions/{session_id}/generate_stream")
async def generate_stream(session_id: str):
    """Generate the character sheet with streaming progress updates."""
    session = get_session_or_404(session_id)

    try:
        request = session.state.begin_generation()
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return StreamingResponse(
        generation_service.generate_stream(session, request),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@app.get("/sessions/{session_id}/results", response_model=list[ResultItem])
async def get_results(session_id: str):
    """List the generated views in order."""
    session = get_session_or_404(session_id)
    return [ResultItem(label=r.label, src=r.src) for r in session.state.results]


# ============================================================================
# Download Endpoints
# ============================================================================


@app.get("/sessions/{session_id}/download")
async def download_archive(session_id: str):
    """Download the original photo and every generated view as one zip."""
    session = get_session_or_404(session_id)
    state = session.state

    if state.screen != Screen.RESULTS or state.image is None or not state.results:
        raise HTTPException(status_code=409, detail="No character sheet to download")

    archive: CharacterSheetArchive = session.packager.package(state.image, state.results)
    return Response(
        content=archive.data,
        media_type=archive.media_type,
        headers={"Content-Disposition": f'attachment; filename="{archive.filename}"'},
    )


# ============================================================================
# Health Check
# ============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Character Concept Generator API",
        "docs": "/docs",
    }


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=get_api_host(), port=get_api_port())


if __name__ == "__main__":
    run()
