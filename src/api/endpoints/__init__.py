"""
API endpoint modules for PrepPilot
"""

from src.api.endpoints import interview, report, metadata

__all__ = ["interview", "report", "metadata"]
