"""Git collaborators: invocation, output parsing and repository checks."""
