"""Host adapters embedding the editing core in a UI toolkit."""
