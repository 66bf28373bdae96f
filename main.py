#!/usr/bin/env python3
"""
VidForge - Main Entry Point
Effect-graded frames, synthesized music and narration for short AI videos
"""

from vidforge.cli import main


if __name__ == "__main__":
    main()
