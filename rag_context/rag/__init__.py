"""Token-budgeted document selection for RAG context payloads."""
