"""Gradio user interface for Stadium Swap.

Modules
-------
app
    ``create_ui()`` and the ``main()`` CLI entry point.
components
    Widget construction and snapshot rendering.
handlers
    Event handlers translating widget events into controller calls.
state
    Lazy per-session controller initialisation.
models
    UIState dataclass and UI text constants.
"""
