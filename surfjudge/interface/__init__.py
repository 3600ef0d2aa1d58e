"""Mini README: Interactive interfaces for SurfJudge.

Exports the FastAPI application factory that hosts the upload flow. The
Typer CLI lives in ``main_surfjudge.py`` at the repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
