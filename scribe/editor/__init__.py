"""
Editor core.

UI-agnostic article and trash state, the editing session, and the export
workflow. Front ends create a Workspace and drive it.
"""
