"""Host adapters for the document engine."""
