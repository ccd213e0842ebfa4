"""JSX code generation."""
