import os
import streamlit as st
import httpx
import pandas as pd

# Use env var in docker; defaults to docker service name
API_URL = os.getenv("API_URL", "http://api:8000")
# If running UI locally (outside docker), set:
#API_URL = "http://127.0.0.1:8000"

st.set_page_config(page_title="postboard", layout="wide")
st.title("postboard")

tab1, tab2 = st.tabs(["New post", "Posts"])

with tab1:
    st.subheader("Upload an image")
    caption = st.text_input("Caption (optional)", "")
    image = st.file_uploader("Image", type=None)

    if st.button("Post"):
        if image is None:
            st.warning("Please choose an image first.")
        else:
            try:
                files = {"image": (image.name, image.getvalue(), image.type or "application/octet-stream")}
                data = {"caption": caption} if caption.strip() else {}
                r = httpx.post(f"{API_URL}/posts", files=files, data=data, timeout=60)
                r.raise_for_status()
                st.success("Posted ✅")
                st.json(r.json())
            except Exception as e:
                st.error(f"Upload failed: {e}")

with tab2:
    st.subheader("Posts")

    def safe_get_json(url: str):
        try:
            r = httpx.get(url, timeout=30)
            r.raise_for_status()
            return r.json()
        except Exception as e:
            st.error(f"API error calling {url}: {e}")
            return None

    _ = st.button("Refresh")  # Streamlit reruns anyway

    posts = safe_get_json(f"{API_URL}/posts")
    if posts is None:
        st.stop()

    df_posts = pd.DataFrame(posts)
    st.caption(f"Rows: {len(df_posts)}")

    if df_posts.empty:
        st.info("No posts yet.")
        st.stop()

    view = st.radio("View", ["Gallery", "Table"], horizontal=True)

    if view == "Table":
        preferred_cols = [c for c in ["id", "caption", "imageUrl", "createdAt"] if c in df_posts.columns]
        other_cols = [c for c in df_posts.columns if c not in preferred_cols]
        st.dataframe(df_posts[preferred_cols + other_cols], use_container_width=True, hide_index=True)
    else:
        cols = st.columns(3)
        # newest first
        for i, p in enumerate(posts[::-1]):
            with cols[i % 3]:
                st.image(f"{API_URL}{p.get('imageUrl')}", use_container_width=True)
                st.caption(p.get("caption") or "")
