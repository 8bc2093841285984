"""Document question-answering pipeline."""
