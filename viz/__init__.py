"""
Visualization Package.

Drawing and UI shells for the commuter engine. `viz.utils` turns simulation
state into plain drawing primitives, `viz.renderer` paints them with
matplotlib, and the two shells (`app_matplotlib` with direct pointer events,
`app_streamlit` with session-state binding) host the same `Visualizer`.
"""

# Visualization Package
