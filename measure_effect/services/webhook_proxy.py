"""
Forwarding of dashboard payloads to the configured n8n webhook.

The JSON body is posted as-is and the webhook's JSON reply is returned
verbatim. Any failure (no URL configured, network error, non-2xx status,
non-JSON reply) is raised so the endpoint can answer 500.
"""

import logging
from typing import Any, Optional

import requests

from measure_effect.core.exceptions import ConfigurationError, UpstreamFetchError


logger = logging.getLogger(__name__)


def forward_to_webhook(webhook_url: Optional[str], payload: Any, timeout: float = 30.0) -> Any:
    """
    POST payload to webhook_url and return the decoded JSON response.

    Args:
        webhook_url: Target URL; None or empty means not configured.
        payload: JSON-serializable request body.
        timeout: Seconds to wait for the webhook.

    Returns:
        The webhook's JSON response.

    Raises:
        ConfigurationError: If no webhook URL is configured.
        UpstreamFetchError: If the call fails or the reply is not usable.
    """
    if not webhook_url:
        logger.error("n8n webhook URL is not configured")
        raise ConfigurationError("n8n Webhook URL is not configured")

    logger.info(f"Forwarding request to n8n: {webhook_url}")

    try:
        response = requests.post(webhook_url, json=payload, timeout=timeout)
    except requests.RequestException as e:
        logger.error(f"n8n webhook request failed: {e}")
        raise UpstreamFetchError(f"n8n webhook request failed: {e}") from e

    if not response.ok:
        logger.error(f"n8n webhook responded with error status {response.status_code}: {response.text}")
        raise UpstreamFetchError(
            f"n8n webhook responded with status {response.status_code}: {response.text}"
        )

    try:
        data = response.json()
    except ValueError as e:
        raise UpstreamFetchError(f"n8n webhook returned a non-JSON response: {e}") from e

    logger.info("Received response from n8n")
    return data
