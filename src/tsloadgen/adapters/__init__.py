"""Adapters connecting the core pipeline to processes, logging and profiling."""
