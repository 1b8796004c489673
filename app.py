import streamlit as st
import pandas as pd
import numpy as np
import plotly.express as px
import plotly.graph_objects as go

from components.workload import WorkLoad
from components.word_file import WordFileFormat, split_fields
from components.bench import time_autocomplete, summarize
from components.tree_store import workload_key, get_tree, drop_tree

# Configure page
st.set_page_config(
    page_title="Radix Autocomplete Explorer",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Main title
st.title("🌳 Radix Tree Autocomplete Explorer")
st.markdown("---")

# Sidebar
with st.sidebar:
    st.header("Workload")
    source = st.selectbox(
        "Choose a source:",
        ["Generated words", "Generated URLs", "Generated IPs", "Word file"]
    )
    seed = st.number_input("Seed", min_value=0, value=42, step=1)
    wl = WorkLoad(seed=int(seed))

    words = []
    if source == "Generated words":
        n = st.slider("Words", 100, 20_000, 2_000, step=100)
        p_freq = st.slider("Prefix frequency", 0.0, 0.99, 0.3)
        words = wl.words(n, p_freq=p_freq)
    elif source == "Generated URLs":
        n = st.slider("URLs", 100, 20_000, 2_000, step=100)
        words = wl.urls(n)
    elif source == "Generated IPs":
        n = st.slider("IPs", 100, 20_000, 2_000, step=100)
        words = wl.ips(n)
    else:
        delimiter = st.text_input("Delimiter", value="|")
        uploaded_file = st.file_uploader("Choose a word file", type=["txt"])
        if uploaded_file is not None and delimiter:
            lines = uploaded_file.getvalue().decode("utf-8").splitlines()
            words = list(split_fields(lines, WordFileFormat(delimiter=delimiter)))

    casefold = st.checkbox("Case-fold strings", value=False)
    st.markdown("---")
    rebuild = st.button("🔄 Rebuild")

normalize = str.casefold if casefold else None

if not words:
    st.info("👆 Pick a workload or upload a word file to build a tree")
    st.stop()

# Keep the tree across reruns; rebuild only when the workload changes
key = workload_key(source, words, casefold)
if rebuild:
    drop_tree(st.session_state)
tree, build_s = get_tree(st.session_state, key, words, normalize=normalize)

# Deletes run before anything is drawn from the tree
with st.sidebar:
    with st.form("delete_form", clear_on_submit=True):
        target = st.text_input("String to delete")
        submitted = st.form_submit_button("🗑️ Delete")
    if submitted and target:
        if tree.delete(target, normalize=normalize):
            st.success(f"✅ Deleted '{target}' ({len(tree):,} strings left)")
        else:
            st.warning(f"⚠️ '{target}' is not stored")

# Tree metrics
col1, col2, col3, col4 = st.columns(4)
with col1:
    st.metric("Stored strings", f"{len(tree):,}", f"{len(words):,} inserted")
with col2:
    st.metric("Nodes", f"{tree.node_count():,}")
with col3:
    st.metric("Avg branching", f"{tree.node_count(get_avg_branch_factor=True):.2f}")
with col4:
    st.metric("Build time", f"{build_s * 1000:.1f} ms")

tab1, tab2, tab3 = st.tabs(["Autocomplete", "Cache Benchmark", "Vocabulary"])

with tab1:
    st.subheader("🔍 Query")
    prefix = st.text_input("Prefix", value=words[0][:2])
    limit = st.slider("Limit", 1, 100, 10)
    results = tree.autocomplete(prefix, limit, normalize=normalize)
    st.write(f"**{len(results)} completions**")
    st.dataframe(pd.DataFrame({"completion": results}), use_container_width=True)

with tab2:
    st.subheader("⏱️ Cold vs warm cache")
    n_prefixes = st.slider("Query prefixes", 10, 2_000, 200, step=10)
    repeats = st.slider("Passes", 2, 10, 3)
    prefixes = wl.prefixes(list(tree.enumerate()), n_prefixes)
    df = time_autocomplete(tree, prefixes, limit=limit, repeats=repeats)
    df["micros"] = df["seconds"] * 1e6

    st.dataframe(summarize(df), use_container_width=True)

    fig = px.box(df, x="pass", y="micros", points="outliers",
                 title="Autocomplete latency per pass (µs)")
    fig.update_layout(xaxis_title="Pass", yaxis_title="Latency (µs)")
    st.plotly_chart(fig, use_container_width=True)

    cold = df[df["pass"] == "cold"]["micros"].to_numpy()
    warm = df[df["pass"] == "warm"]["micros"].to_numpy()
    fig_cdf = go.Figure()
    for name, values in (("cold", cold), ("warm", warm)):
        xs = np.sort(values)
        ys = np.arange(1, len(xs) + 1) / max(len(xs), 1)
        fig_cdf.add_trace(go.Scatter(x=xs, y=ys, mode="lines", name=name))
    fig_cdf.update_layout(title="Latency CDF", xaxis_title="Latency (µs)",
                          yaxis_title="Fraction of queries", xaxis_type="log")
    st.plotly_chart(fig_cdf, use_container_width=True)
    st.caption(f"Cached prefixes after benchmark: {len(tree.cache):,}")

with tab3:
    st.subheader("📋 Stored strings")
    vocab = pd.DataFrame({"string": list(tree.enumerate())})
    vocab["length"] = vocab["string"].str.len()
    st.dataframe(vocab, use_container_width=True)

    fig_len = px.histogram(vocab, x="length", title="String length distribution")
    st.plotly_chart(fig_len, use_container_width=True)

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | Radix Autocomplete Explorer
    </div>
    """,
    unsafe_allow_html=True
)
