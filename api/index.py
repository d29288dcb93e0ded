"""
Serverless entry point for the GitHub lookup form.

Vercel's Python runtime calls ``handler(event, context)``; Mangum turns that
event into an ASGI request for the FastAPI app in ``backend/gh_lookup``.
"""
import sys
from pathlib import Path

# gh_lookup lives under backend/, outside the function's own directory
backend_path = Path(__file__).parent.parent / "backend"
sys.path.insert(0, str(backend_path))

from gh_lookup.main import app

from mangum import Mangum

# lifespan off: the GitHub client is shared across invocations
mangum_handler = Mangum(app, lifespan="off")


def handler(event, context=None):
    """Answer one form page or /api/* request."""
    return mangum_handler(event, context)
