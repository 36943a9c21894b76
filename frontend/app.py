import streamlit as st

from frontend import client as relay
from frontend.client import RelayClient, RelayError, format_takeaways, thumbnail_filename


@st.cache_data(show_spinner=False, ttl="1h")
def load_thumbnail(url):
    return relay.download_thumbnail(url)


# Page configuration
st.set_page_config(
    page_title="Video to Blog Converter",
    page_icon="🎥",
    layout="centered",
)

# CSS styles
st.markdown("""
<style>
    .filename {
        font-size: 0.9em;
        color: #4b5563;
    }
</style>
""", unsafe_allow_html=True)

st.title("🎥 Video to Blog Converter")
st.markdown("Transform your video transcripts into blog-ready content")

client = RelayClient()

if "results" not in st.session_state:
    st.session_state.results = None

with st.form("convert"):
    url = st.text_input("YouTube URL", placeholder="https://www.youtube.com/watch?v=...")
    transcript = st.text_area("Video Transcript", placeholder="Paste your video transcript here...", height=250)
    submitted = st.form_submit_button("📄 Convert to Blog Content", use_container_width=True)

if submitted:
    if not url or not transcript:
        st.warning("Please provide both URL and transcript")
    else:
        with st.status("Processing...", expanded=True) as status:
            try:
                st.session_state.results = client.process(url, transcript, on_step=status.write)
                status.update(label="Done", state="complete", expanded=False)
            except RelayError as e:
                status.update(label="Failed", state="error")
                st.error(f"Error: {e}")

results = st.session_state.results

if results:
    # SEO section
    st.subheader("🏷️ SEO Content")
    st.markdown("**SEO Title**")
    st.code(results.seo_title, language=None)
    st.markdown("**Meta Description**")
    st.code(results.meta_description, language=None, wrap_lines=True)

    # Formatted transcript
    st.subheader("📄 Formatted Transcript")
    with st.container(height=400):
        st.code(results.formatted_transcript, language=None, wrap_lines=True)

    # Key takeaways
    st.subheader("Key Takeaways")
    st.code(format_takeaways(results.key_takeaways), language=None, wrap_lines=True)

    # FAQs
    st.subheader("💬 FAQs with Schema")
    for faq in results.faqs:
        st.markdown(f"**Q: {faq.get('question', '')}**")
        st.markdown(f"A: {faq.get('answer', '')}")
    st.markdown("**Schema Markup (Copy to WordPress text block)**")
    st.code(results.schema_markup, language="html", wrap_lines=True)

    # Thumbnail
    st.subheader("Video Thumbnail")
    col1, col2 = st.columns([1, 2])
    filename = thumbnail_filename(results.seo_title)

    with col1:
        st.image(results.thumbnail_url, use_container_width=True)

    with col2:
        image = load_thumbnail(results.thumbnail_url)
        if image is not None:
            st.download_button(
                label="📥 Download Thumbnail",
                data=image,
                file_name=filename,
                mime="image/jpeg",
                key=f"thumbnail_{results.video_id}",
            )
        else:
            st.link_button("Open Thumbnail", results.thumbnail_url)
        st.markdown(f'<p class="filename">Filename: {filename}</p>', unsafe_allow_html=True)
