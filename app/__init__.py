"""HTTP service and command-line entry points for Baseline Guard."""
