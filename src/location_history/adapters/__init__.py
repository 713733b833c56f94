"""Host adapters embedding the history core in concrete UIs."""
