"""
PrepPilot - Mock Interview Practice Service

Create an interview for a job role, answer generated questions by text,
audio or video, and get feedback on every answer plus overall results.
"""

__version__ = "0.1.0"
__author__ = "PrepPilot Team"
