"""
FastAPI router module for forwarding payloads to the n8n workflow.

Key Endpoints:
- POST /n8n-proxy: post the JSON body to N8N_WEBHOOK_URL and return the
  webhook's JSON response unchanged

The handler is a plain function so FastAPI runs the blocking HTTP call in
its threadpool.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from measure_effect.core.dependencies import SettingsDep
from measure_effect.core.exceptions import ConfigurationError, UpstreamFetchError
from measure_effect.services.webhook_proxy import forward_to_webhook


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post('/n8n-proxy', summary="Forward to n8n")
def proxy_to_n8n(settings: SettingsDep, payload: Any = Body(...)) -> Any:
    """
    Forward the request body to the configured n8n webhook.

    Raises:
        HTTPException 500: If the webhook URL is not configured or the call fails.
    """
    logger.info("Received n8n proxy request")

    try:
        return forward_to_webhook(
            settings.n8n_webhook_url,
            payload,
            timeout=settings.webhook_timeout_seconds,
        )
    except (ConfigurationError, UpstreamFetchError) as e:
        logger.error(f"Error in n8n proxy API: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
