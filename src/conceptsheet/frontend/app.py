"""Streamlit frontend for the Character Concept Generator."""

import json
import time

import requests
import streamlit as st

from conceptsheet.core.config import get_api_base_url

# Configuration
API_BASE_URL = get_api_base_url()

# Seconds between state checks while another run is generating
LOADING_POLL_SECONDS = 2

SUBTITLE = (
    "Upload a photo of a character, pick a style, and generate a new concept art "
    "sheet. For best results, start with a clear, well-lit headshot."
)

# Page configuration
st.set_page_config(
    page_title="Character Concept Generator",
    page_icon="🎨",
    layout="wide",
)


# ============================================================================
# Session Management
# ============================================================================


def init_session():
    """Initialize a new API session."""
    try:
        response = requests.post(f"{API_BASE_URL}/sessions", timeout=10)
        if response.status_code == 200:
            return response.json()
        return None
    except requests.exceptions.RequestException:
        return None


def get_or_create_session():
    """Get existing session or create new one."""
    if "api_session" not in st.session_state:
        session_data = init_session()
        if session_data:
            st.session_state.api_session = session_data
            st.session_state.uploaded_name = None
            st.session_state.archive = None
        else:
            st.error("Failed to connect to API server. Is it running?")
            st.stop()
    return st.session_state.api_session


# ============================================================================
# API Functions
# ============================================================================


def get_catalog():
    """Fetch the style, ratio and background catalog."""
    if "catalog" not in st.session_state:
        response = requests.get(f"{API_BASE_URL}/catalog", timeout=10)
        response.raise_for_status()
        st.session_state.catalog = response.json()
    return st.session_state.catalog


def get_state(session_id: str):
    """Get the session's screen and selections."""
    response = requests.get(f"{API_BASE_URL}/sessions/{session_id}", timeout=10)
    response.raise_for_status()
    return response.json()


def upload_image(session_id: str, file):
    """Upload the character photo; returns an error message or None."""
    try:
        files = {"file": (file.name, file.getvalue(), file.type)}
        response = requests.post(
            f"{API_BASE_URL}/sessions/{session_id}/image",
            files=files,
            timeout=30,
        )
        if response.status_code == 200:
            return None
        return response.json().get("detail", response.text)
    except requests.exceptions.RequestException as e:
        return f"Upload error: {e}"


def update_selections(session_id: str, **selections):
    """Set style, aspect ratio or background."""
    try:
        requests.put(
            f"{API_BASE_URL}/sessions/{session_id}/selections",
            json=selections,
            timeout=10,
        )
    except requests.exceptions.RequestException as e:
        st.error(f"Could not save selection: {e}")


def reset_session(session_id: str):
    try:
        requests.post(f"{API_BASE_URL}/sessions/{session_id}/reset", timeout=10)
    except requests.exceptions.RequestException as e:
        st.error(f"Reset failed: {e}")
    st.session_state.uploaded_name = None
    st.session_state.upload_error = None
    st.session_state.stream_error = None
    st.session_state.archive = None
    # A new widget key drops the file still held by the uploader
    st.session_state.uploader_key = st.session_state.get("uploader_key", 0) + 1


def get_preview(session_id: str):
    """Fetch the uploaded photo preview bytes."""
    try:
        response = requests.get(f"{API_BASE_URL}/sessions/{session_id}/image", timeout=30)
    except requests.exceptions.RequestException:
        return None
    return response.content if response.status_code == 200 else None


def get_results(session_id: str):
    response = requests.get(f"{API_BASE_URL}/sessions/{session_id}/results", timeout=30)
    if response.status_code == 200:
        return response.json()
    return []


def fetch_archive(session_id: str):
    """Download the zip archive; returns (filename, bytes) or None."""
    try:
        response = requests.get(f"{API_BASE_URL}/sessions/{session_id}/download", timeout=60)
    except requests.exceptions.RequestException:
        return None
    if response.status_code != 200:
        return None
    disposition = response.headers.get("content-disposition", "")
    filename = disposition.split("filename=")[-1].strip('"') or "character-sheet.zip"
    return filename, response.content


def generate_stream(session_id: str):
    """Run generation and yield progress events."""
    try:
        response = requests.post(
            f"{API_BASE_URL}/sessions/{session_id}/generate_stream",
            stream=True,
            timeout=600,
        )

        if response.status_code == 200:
            for line in response.iter_lines():
                if line:
                    line = line.decode("utf-8")
                    if line.startswith("data: "):
                        data = line[6:]  # Remove "data: " prefix
                        if data == "[DONE]":
                            break
                        try:
                            yield json.loads(data)
                        except json.JSONDecodeError:
                            continue
        else:
            yield {"event": "error", "error": f"API error: {response.status_code}"}
    except requests.exceptions.RequestException as e:
        yield {"event": "error", "error": str(e)}


# ============================================================================
# Screens
# ============================================================================


def render_option_buttons(label: str, options: list, current, field: str, session_id: str):
    """Render a row of toggle buttons; the selected one is primary."""
    st.caption(label)
    columns = st.columns(len(options))
    for column, (value, text) in zip(columns, options):
        with column:
            kind = "primary" if current == value else "secondary"
            if st.button(text, key=f"{field}_{value}", type=kind, use_container_width=True):
                update_selections(session_id, **{field: value})
                st.rerun()


def render_upload_screen(session_id: str, state: dict):
    """Photo picker, style and composition choices, and the Generate button."""
    catalog = get_catalog()

    st.title("Character Concept Generator")
    st.caption(SUBTITLE)

    error = (
        state.get("error")
        or st.session_state.get("upload_error")
        or st.session_state.get("stream_error")
    )
    if error:
        st.error(error)

    uploaded_file = st.file_uploader(
        "Click or drag image to upload",
        type=["png", "jpg", "jpeg", "webp", "gif"],
        key=f"uploader_{st.session_state.get('uploader_key', 0)}",
    )

    if uploaded_file and uploaded_file.name != st.session_state.get("uploaded_name"):
        st.session_state.uploaded_name = uploaded_file.name
        st.session_state.upload_error = upload_image(session_id, uploaded_file)
        st.rerun()

    if not state.get("has_image"):
        return

    preview = get_preview(session_id)
    if preview:
        st.image(preview, caption="Your uploaded preview", width=320)

    st.subheader("Choose a Style")
    styles = catalog["styles"]
    render_option_buttons(
        "Style",
        [(s["key"], s["display_name"]) for s in styles],
        state.get("style"),
        "style",
        session_id,
    )
    selected = next((s for s in styles if s["key"] == state.get("style")), None)
    if selected:
        st.info(selected["prompt"])

    st.subheader("Composition")
    ratio_col, chroma_col = st.columns(2)
    with ratio_col:
        render_option_buttons(
            "Aspect Ratio",
            [(ratio, ratio) for ratio in catalog["aspect_ratios"]],
            state.get("aspect_ratio"),
            "aspect_ratio",
            session_id,
        )
    with chroma_col:
        render_option_buttons(
            "Background",
            [(c["key"], c["display_name"]) for c in catalog["chroma_colors"]],
            state.get("chroma"),
            "chroma",
            session_id,
        )

    if st.button("Generate", type="primary", disabled=not state.get("can_generate")):
        # Redraw from scratch so only the loading screen is visible
        st.session_state.generating = True
        st.session_state.upload_error = None
        st.session_state.stream_error = None
        st.rerun()


def render_loading_screen(session_id: str):
    """Stream the run started by the Generate button, showing its progress caption."""
    st.title("Character Concept Generator")
    with st.spinner("Generating your character sheet..."):
        status_text = st.empty()
        for event in generate_stream(session_id):
            event_type = event.get("event", "")
            if event_type == "progress":
                status_text.text(event.get("status", ""))
            elif event_type == "error":
                st.session_state.stream_error = event.get("error", "Unknown error")
                break
    st.session_state.generating = False
    st.rerun()


def render_waiting_screen(state: dict):
    """Loading screen for a run this page did not start (e.g. after a reload)."""
    st.title("Character Concept Generator")
    with st.spinner("Generating your character sheet..."):
        st.text(state.get("progress") or "Generating...")
        time.sleep(LOADING_POLL_SECONDS)
    st.rerun()


def render_results_screen(session_id: str, state: dict):
    """Original photo, the three generated views and the download action."""
    st.title("Your Character Concept")
    st.caption(SUBTITLE)

    results = get_results(session_id)
    columns = st.columns(len(results) + 1)
    with columns[0]:
        preview = get_preview(session_id)
        if preview:
            st.image(preview, caption="Original")
    for column, result in zip(columns[1:], results):
        with column:
            st.image(result["src"], caption=result["label"])

    reset_col, download_col = st.columns(2)
    with reset_col:
        if st.button("Create Another", type="primary", use_container_width=True):
            reset_session(session_id)
            st.rerun()
    with download_col:
        if st.button("Prepare Download", use_container_width=True):
            st.session_state.archive = fetch_archive(session_id)
            if st.session_state.archive is None:
                st.error("Could not build the archive")
        if st.session_state.get("archive"):
            filename, data = st.session_state.archive
            st.download_button(
                label="⬇️ Download All",
                data=data,
                file_name=filename,
                mime="application/zip",
                use_container_width=True,
            )


# ============================================================================
# Main App
# ============================================================================


def choose_screen(screen: str, generating: bool) -> str:
    """Pick the single screen to draw for this run.

    Args:
        screen: Session screen reported by the API
        generating: Whether this page started a run that still has to stream

    Returns:
        One of 'stream', 'results', 'waiting' or 'upload'
    """
    if generating:
        return "stream"
    if screen == "results":
        return "results"
    if screen == "loading":
        return "waiting"
    return "upload"


def main():
    """Main application."""
    session = get_or_create_session()
    session_id = session["session_id"]
    state = get_state(session_id)

    view = choose_screen(state["screen"], bool(st.session_state.get("generating")))
    if view == "stream":
        render_loading_screen(session_id)
    elif view == "results":
        render_results_screen(session_id, state)
    elif view == "waiting":
        render_waiting_screen(state)
    else:
        render_upload_screen(session_id, state)


if __name__ == "__main__":
    main()
