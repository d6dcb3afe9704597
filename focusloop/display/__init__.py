"""focusloop terminal display.

Modules
-------
surface
    ``DrawingSurface`` protocol and the Rich-backed ``TerminalSurface``.
renderer
    ``LiveRenderer`` draws the timer box, gradient bar and time left from a
    ``RenderState``.  Stateless per frame.
prompts
    ``DurationPrompter`` asks for work/break lengths once per process.
recap
    Plain-text and Rich recap of the Session Ledger.
"""
