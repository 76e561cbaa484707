"""
AI Gateway Package
FastAPI service in front of the language and vision model backends
"""

__version__ = "1.0.0"

__all__ = [
    "core",
    "providers",
    "routers",
    "services",
    "processors",
    "schemas",
    "utils"
]
