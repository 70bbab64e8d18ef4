"""User interfaces for SoloPDF."""
