"""Simulation core: lattice, neighborhoods, rules and engine."""
