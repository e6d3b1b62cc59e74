import streamlit as st
import asyncio
import base64
import logging
import pandas as pd

from cinemind.base_config import LANGUAGES
from cinemind.generation.client import GenerationClient
from cinemind.ingestion.extractor import ExtractionError, extract_text
from cinemind.models import InputType, ProductionMode, StoryInput
from cinemind.production.coordinator import ProductionCoordinator
from cinemind.store import ProductionStore
from cinemind.storyboard.agents.storyboard_formatter_agent import StoryboardFormatterAgent

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

formatter = StoryboardFormatterAgent()

MODE_LABELS = {
    ProductionMode.NETFLIX: "Netflix (Streaming)",
    ProductionMode.FESTIVAL: "Festival (Art House)",
    ProductionMode.BUDGET: "Budget (Indie)",
}

STATE_ICONS = {
    "pending": "○ Pending",
    "processing": "⏳ Processing",
    "complete": "✅ Complete",
}


def get_store() -> ProductionStore:
    if 'store' not in st.session_state:
        st.session_state.store = ProductionStore()
    return st.session_state.store


def render_status_board(placeholder, store: ProductionStore):
    """Status table for the active role sequence."""
    if not store.statuses:
        placeholder.info("Pipeline idle. Configure a run and start production.")
        return

    df = pd.DataFrame([
        {
            "Agent": status.label,
            "Task": status.description,
            "Status": STATE_ICONS[status.state],
        }
        for status in store.statuses
    ])
    placeholder.dataframe(df, hide_index=True, use_container_width=True)


def render_gallery(placeholder, store: ProductionStore):
    """Storyboard slots with a badge per generation status."""
    images = store.package.generated_images
    with placeholder.container():
        if not images and not store.is_generating_images:
            return

        st.subheader("Visual Assets")
        if not images:
            st.caption("INITIALIZING RENDER ENGINE...")
            return

        columns = st.columns(2)
        for i, image in enumerate(images):
            with columns[i % 2]:
                if image.status == "rendering":
                    st.info("RENDERING...")
                elif image.status == "ready":
                    payload = image.base64.split(",", 1)[-1]
                    st.image(base64.b64decode(payload), use_container_width=True)
                else:
                    st.error("Failed to load")
                st.caption(image.prompt)


def render_live_report(placeholder, store: ProductionStore):
    """Read-only view of the newest artifact while a run is in flight."""
    latest = formatter.latest_report(store.package)
    processing = store.processing_role

    with placeholder.container():
        if processing is not None:
            st.info(f"{processing.value} is working...")
        if latest is None:
            return

        role, content = latest
        st.header(f"/ {role.value} Report")
        st.caption(formatter.project_header(store.package))
        st.markdown(content)


def make_store_listener(status_placeholder, report_placeholder, gallery_placeholder):
    """Store listener that redraws each live region when its state changes."""
    def on_change(event, changed_store):
        if event in ("reset", "status"):
            render_status_board(status_placeholder, changed_store)
            render_live_report(report_placeholder, changed_store)
        elif event == "artifact":
            render_live_report(report_placeholder, changed_store)
        elif event in ("images", "generating_images"):
            render_gallery(gallery_placeholder, changed_store)

    return on_change


def show_configuration():
    """Run configuration form. Returns (StoryInput, rewrite flag)."""
    st.sidebar.title("CineMind Studio")
    st.sidebar.caption("Autonomous Multi-Agent Production Pipeline")

    title = st.sidebar.text_input("Project Title", placeholder="Enter working title...")
    genre = st.sidebar.text_input("Genre", placeholder="Sci-Fi, Noir...")
    mode = st.sidebar.selectbox(
        "Mode",
        list(ProductionMode),
        format_func=lambda m: MODE_LABELS[m],
    )
    language = st.sidebar.selectbox("Language", LANGUAGES + ["Other..."])
    if language == "Other...":
        language = st.sidebar.text_input("Custom language", value="English")

    source = st.sidebar.radio("Input", ["Logline", "Upload Script"], horizontal=True)
    rewrite_script = False
    content = ""

    if source == "Logline":
        content = st.sidebar.text_area(
            "Logline / Script Idea",
            placeholder="A retired detective discovers a time machine in his basement...",
            height=140,
        )
        input_type = InputType.LOGLINE
    else:
        uploaded_file = st.sidebar.file_uploader("Choose a script file", type=['txt', 'pdf', 'docx'])
        input_type = InputType.SCRIPT
        rewrite_script = st.sidebar.checkbox("Rewrite & polish the script first")
        if uploaded_file is not None:
            try:
                content = extract_text(uploaded_file.name, uploaded_file.getvalue(), uploaded_file.type)
                st.sidebar.success(f"Loaded {len(content):,} characters from {uploaded_file.name}")
            except ExtractionError as e:
                st.sidebar.error(str(e))

    return StoryInput(
        title=title,
        genre=genre,
        mode=mode,
        language=language,
        content=content,
        input_type=input_type,
    ), rewrite_script


async def run_production(story_input: StoryInput, rewrite_script: bool, store: ProductionStore):
    async with GenerationClient() as client:
        coordinator = ProductionCoordinator(client=client, store=store)
        return await coordinator.produce_all(story_input, rewrite_script)


def show_report(store: ProductionStore):
    """Markdown view of the selected role's artifact."""
    if not store.statuses:
        return

    roles = [status.id for status in store.statuses]
    default = roles.index(store.active_role) if store.active_role in roles else 0
    role = st.radio(
        "Report",
        roles,
        index=default,
        horizontal=True,
        format_func=lambda r: r.value,
    )
    if role != store.active_role:
        store.select_role(role)

    package = store.package
    st.header(f"/ {role.value} Report")
    st.caption(formatter.project_header(package))

    content = package.artifact_for(role)
    if content is None:
        st.info("Waiting for agent input...")
        return

    st.download_button(
        "Export report",
        formatter.format_report(package, role),
        file_name=f"{role.value.lower()}_report.md",
        mime="text/markdown",
    )
    st.markdown(content)


def main():
    st.set_page_config(page_title="CineMind Studio", layout="wide")

    store = get_store()
    if 'running' not in st.session_state:
        st.session_state.running = False

    story_input, rewrite_script = show_configuration()

    start = st.sidebar.button(
        "PRODUCING..." if st.session_state.running else "START PRODUCTION",
        type="primary",
        use_container_width=True,
        disabled=st.session_state.running or not story_input.has_content,
    )

    st.sidebar.markdown("---")
    st.sidebar.subheader("Production Pipeline")
    status_placeholder = st.sidebar.empty()
    render_status_board(status_placeholder, store)

    report_placeholder = st.empty()
    gallery_placeholder = st.empty()
    render_gallery(gallery_placeholder, store)

    if start:
        unsubscribe = store.subscribe(
            make_store_listener(status_placeholder, report_placeholder, gallery_placeholder)
        )
        st.session_state.running = True
        try:
            with st.spinner("Producing film package..."):
                result = asyncio.run(run_production(story_input, rewrite_script, store))
            logger.info(f"Production finished with status {result['status']}")
        finally:
            unsubscribe()
            st.session_state.running = False
        st.rerun()

    if store.error:
        st.error(f"Production halted due to an error: {store.error}")

    with report_placeholder.container():
        show_report(store)

    if store.package.populated_roles():
        st.sidebar.download_button(
            "Export full package",
            formatter.format_package(store.package),
            file_name="film_package.md",
            mime="text/markdown",
            use_container_width=True,
        )


if __name__ == "__main__":
    main()
