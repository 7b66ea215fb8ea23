"""Post-meal glycemic impact analysis."""
