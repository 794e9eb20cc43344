"""Language-model agents used by the backend."""
