"""Terminal side of the node dashboard.

Modules
-------
renderer
    ``ConsoleRenderer`` erases and redraws the node table in place using
    cursor-addressing escape sequences, and interleaves completion lines.
scheduler
    ``RefreshScheduler`` drives ``ConsoleRenderer.refresh`` from a
    background thread at a fixed cadence until stopped.
"""
