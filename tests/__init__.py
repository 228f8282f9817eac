"""ProseCheck test suite."""
