"""
API package for the Measure Effect backend.

Exports the FastAPI routers registered by measure_effect.main:
- summary_router: GET /monthly-summary
- client_details_router: GET /client-details
- assistant_router: POST /chat, POST /generate-report
- webhook_router: POST /n8n-proxy
"""

from measure_effect.api.summary import router as summary_router
from measure_effect.api.client_details import router as client_details_router
from measure_effect.api.assistant import router as assistant_router
from measure_effect.api.webhook import router as webhook_router

__all__ = [
    'summary_router',
    'client_details_router',
    'assistant_router',
    'webhook_router',
]
