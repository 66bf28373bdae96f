"""
VidForge media core

Deterministic media processing for short AI-assembled videos:
- Frame effects (motion blur, film grain, vignette, color grading)
- Procedural background music synthesis
- Narration through a platform speech provider
"""

__version__ = "0.1.0"
