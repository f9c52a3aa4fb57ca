"""Host adapters (UI shells) around the editing engine."""
