"""Command line interface for the FAIRsharing metric report tool."""
