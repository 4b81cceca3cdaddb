"""Command line scripts for pCDM modelling."""
