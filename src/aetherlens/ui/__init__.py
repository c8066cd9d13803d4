"""Gradio user interface for AetherLens."""
