"""Click plumbing shared by the ujcon CLI: command class and app context."""
