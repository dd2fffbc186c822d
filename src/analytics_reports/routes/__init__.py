"""
Analytics report routes.

JSON endpoints over a ReportBuilder.
"""

from .reports import create_reports_router

__all__ = ["create_reports_router"]
