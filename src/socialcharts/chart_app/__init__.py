"""Standalone NiceGUI app showing the social media charts."""
