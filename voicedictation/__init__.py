"""Text post-processing, voice activity detection and desktop helpers for voice dictation."""

__version__ = "0.1.0"