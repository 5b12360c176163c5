"""Host adapters that drive an editor session."""
