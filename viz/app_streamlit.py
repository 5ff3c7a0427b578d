"""
Streamlit interface for the commuter graph visualizer.

Declarative shell over the same engine as the matplotlib window. Every rerun
reads the `Visualizer` kept in the session state, applies the command of the
button that was pressed and repaints the surface with the shared renderer.

Interface includes:
- Layout toggle (NN / GNN), Run, Reset and single Step controls
- Timed playback of a number of frames at a chosen speed
- Surface size controls; changing them regenerates the topology
- Node selection with an inspector panel and the kernel log

Run with ``streamlit run viz/app_streamlit.py``.
"""

import os
import sys
import time

# Add project root to Python path BEFORE any imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import matplotlib.pyplot as plt
import streamlit as st

from commuter_core.config import SimulationConfig
from commuter_core.enums import LayoutMode
from commuter_core.lifecycle import Visualizer
from commuter_core.metrics import active_node_count, completion_ratio, packets_in_flight, total_arrivals
from viz.renderer import Renderer

# Playback speed: seconds slept between frames
SPEED_DELAY_MAPPING = {
    "Slow": 0.1,
    "Normal": 0.05,
    "Fast": 0.016,
}

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 450
FIGURE_DPI = 100


def get_speed_label_from_delay(delay):
    """Map a frame delay back to its speed label, falling back to the nearest bucket."""
    for label, value in SPEED_DELAY_MAPPING.items():
        if value == delay:
            return label
    if delay > SPEED_DELAY_MAPPING["Normal"]:
        return "Slow"
    return "Fast"


def make_visualizer(mode=LayoutMode.GNN, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT, seed=None):
    """Create and mount a visualizer for a fixed-size surface."""
    vis = Visualizer(SimulationConfig(seed=seed), mode=mode)
    vis.mount(width, height)
    return vis


def render_figure(vis):
    """Paint the current state into a new matplotlib figure sized to the surface."""
    width = max(vis.width, 1.0)
    height = max(vis.height, 1.0)
    fig = plt.figure(figsize=(width / FIGURE_DPI, height / FIGURE_DPI), dpi=FIGURE_DPI)
    ax = fig.add_axes([0, 0, 1, 1])
    Renderer(ax).draw_simulation(vis.simulation, vis.controller.selected_id)
    return fig


def node_options(vis):
    """Selectbox options: None followed by every node id in id order."""
    return [None] + [n.id for n in vis.simulation.topology.iter_nodes()]


def format_log(entries):
    return "\n".join(entries) if entries else "(empty)"


def show_surface(placeholder, vis):
    fig = render_figure(vis)
    placeholder.pyplot(fig, use_container_width=True)
    plt.close(fig)


st.set_page_config(layout="wide", page_title="Commuter Graph Demo")

st.markdown(
    """
    <style>
    .block-container { padding-top: 3rem; padding-bottom: 2rem; }
    div[data-testid="stMetricValue"] { font-size: 1.3rem; }
    </style>
    """,
    unsafe_allow_html=True,
)

vis = st.session_state.get("vis")
if vis is None:
    vis = make_visualizer()
    st.session_state.vis = vis

with st.sidebar:
    st.header("Controls")

    mode_label = "NN (Layered)" if vis.mode == LayoutMode.NN else "GNN (Graph)"
    if st.button(f"Toggle layout: {mode_label}", use_container_width=True):
        vis.toggle_layout()

    c1, c2 = st.columns(2)
    with c1:
        if st.button("Run", type="primary", use_container_width=True, disabled=vis.simulation.running):
            vis.run()
    with c2:
        if st.button("Reset", use_container_width=True):
            vis.reset()

    if st.button("Step", use_container_width=True):
        vis.simulation.advance()

    st.subheader("Playback")
    frames = st.slider("Frames", min_value=1, max_value=300, value=60)
    speed = st.select_slider("Speed", options=list(SPEED_DELAY_MAPPING), value="Normal")
    play = st.button("Play", use_container_width=True)

    st.subheader("Surface")
    width = st.number_input("Width (px)", min_value=100, max_value=2000, value=int(vis.width or DEFAULT_WIDTH), step=50)
    height = st.number_input("Height (px)", min_value=100, max_value=2000, value=int(vis.height or DEFAULT_HEIGHT), step=50)
    vis.resize(float(width), float(height))

    st.subheader("Inspect")
    options = node_options(vis)
    current = vis.controller.selected_id if vis.controller.selected_id in options else None
    choice = st.selectbox(
        "Node",
        options,
        index=options.index(current),
        format_func=lambda nid: "(none)" if nid is None else f"NODE_{nid}",
    )
    if choice != vis.controller.selected_id:
        vis.controller.select(choice)

col_main, col_side = st.columns([3, 1])

with col_main:
    st.subheader(f"Mode: {vis.mode.description}")
    surface = st.empty()
    if play:
        delay = SPEED_DELAY_MAPPING[speed]
        for _ in range(int(frames)):
            vis.tick()
            show_surface(surface, vis)
            time.sleep(delay)
    else:
        show_surface(surface, vis)

with col_side:
    m1, m2 = st.columns(2)
    m1.metric("Tick", vis.simulation.t)
    m2.metric("In flight", packets_in_flight(vis.simulation))
    m3, m4 = st.columns(2)
    m3.metric("Arrivals", total_arrivals(vis.simulation))
    m4.metric("Active", active_node_count(vis.simulation))
    st.progress(completion_ratio(vis.simulation))

    info = vis.inspector()
    if info is not None:
        st.markdown(f"**NODE_{info['id']}**")
        st.text(f"VAL:   {info['val']}\nLAYER: {info['layer']}\nACT:   {info['status']}")

    st.caption("Kernel log")
    st.code(format_log(vis.log.entries), language=None)
