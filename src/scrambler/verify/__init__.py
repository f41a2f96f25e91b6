"""Post-substitution checks and run reports."""
