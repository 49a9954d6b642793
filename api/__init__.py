"""
FastAPI boundary for mutation payloads.

Import concrete functionality from explicit submodules:
- `api.endpoints` for the payload decorator and exception handlers
- `api.models` for typed payload and error response models
- `api.app` for the application factory
"""

__all__: list[str] = []
