# prayertools/services/upstream.py

import requests
from flask import current_app

from ..errors import UpstreamError
from ..metrics import API_REQUESTS_TOTAL, API_REQUEST_DURATION_SECONDS


def get_json(adapter_name, endpoint_name, url, params=None, timeout=10, failure_message=None):
    """
    GETs `url` and returns the decoded JSON body unchanged.

    Any timeout, transport error, non-2xx status or non-JSON body raises
    UpstreamError carrying `failure_message` (or the generic one). The
    underlying exception is only logged. Nothing is retried or cached.
    """
    current_app.logger.info(f"{adapter_name}: GET {url} params={_loggable(params)}")

    with API_REQUEST_DURATION_SECONDS.labels(adapter_name=adapter_name, endpoint=endpoint_name).time():
        try:
            response = requests.get(url, params=params, timeout=timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            current_app.logger.error(f"{adapter_name}: Timeout calling {endpoint_name}.", exc_info=True)
            API_REQUESTS_TOTAL.labels(adapter_name=adapter_name, endpoint=endpoint_name, status='timeout').inc()
            raise UpstreamError(failure_message, cause=e)
        except requests.exceptions.RequestException as e:
            # Covers connection errors, HTTPError from raise_for_status and invalid JSON bodies.
            current_app.logger.error(f"{adapter_name}: RequestException for {endpoint_name}: {e}", exc_info=True)
            API_REQUESTS_TOTAL.labels(adapter_name=adapter_name, endpoint=endpoint_name, status='error').inc()
            raise UpstreamError(failure_message, cause=e)
        except ValueError as e:
            current_app.logger.error(f"{adapter_name}: Non-JSON response from {endpoint_name}: {e}")
            API_REQUESTS_TOTAL.labels(adapter_name=adapter_name, endpoint=endpoint_name, status='error').inc()
            raise UpstreamError(failure_message, cause=e)

    API_REQUESTS_TOTAL.labels(adapter_name=adapter_name, endpoint=endpoint_name, status='success').inc()
    return data


def _loggable(params):
    # API keys stay out of the log
    if not params:
        return params
    return {k: ('***' if k == 'key' else v) for k, v in params.items()}
