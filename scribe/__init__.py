"""
Scribe.

- backend/: FastAPI summary service, shared configuration, logging and errors
- editor/: Article, trash and editing-session state for the authoring front ends
"""

__version__ = "0.1.0"
