"""Gradio user interface for Wallgen."""
