"""Use cases: one class per external operation, each with execute()."""
