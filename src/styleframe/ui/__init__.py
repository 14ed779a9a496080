"""Gradio user interface for Styleframe.

Modules
-------
app
    Blocks layout, event wiring and the standalone ``main()`` entry point.
components
    Form, current-image display and history grid.
handlers
    Event handlers (generate, select, clear, restore).
themes
    Theme registry used to style the single component set.
"""
