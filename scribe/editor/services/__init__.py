# Editor services package
from scribe.editor.services.export import ExportArtifact, SummaryWorkflow
from scribe.editor.services.session import DocumentSession, SessionState
from scribe.editor.services.trash import TrashManager

__all__ = [
    "DocumentSession",
    "ExportArtifact",
    "SessionState",
    "SummaryWorkflow",
    "TrashManager",
]
