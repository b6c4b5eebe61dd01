from __future__ import annotations

import json
import logging
from http.client import HTTPException
from urllib.request import Request, urlopen

from bed_app.config import HTTP_TIMEOUT_SECONDS, get_calculator_endpoint
from bed_app.errors import DispatchError
from bed_app.models import CalculationResult, ValidatedRequest

logger = logging.getLogger(__name__)

USER_AGENT = "bed-calculator-streamlit-app/1.0"


def _post_json(url: str, payload: dict) -> object:
    body = json.dumps(payload).encode("utf-8")
    request = Request(
        url,
        data=body,
        headers={"Content-Type": "application/json", "User-Agent": USER_AGENT},
        method="POST",
    )
    # urlopen raises HTTPError for any non-2xx status.
    if HTTP_TIMEOUT_SECONDS is None:
        response_context = urlopen(request)  # noqa: S310
    else:
        response_context = urlopen(request, timeout=HTTP_TIMEOUT_SECONDS)  # noqa: S310
    with response_context as response:
        raw = response.read().decode("utf-8")
    return json.loads(raw)


def dispatch(request: ValidatedRequest, endpoint: str | None = None) -> CalculationResult:
    url = endpoint or get_calculator_endpoint()
    payload = request.to_payload()
    logger.info("Requesting BED from %s (%s gap mode)", url, request.gap_mode.value)

    try:
        body = _post_json(url, payload)
    except (HTTPException, OSError, ValueError, RecursionError) as exc:
        # OSError covers URLError and HTTPError; ValueError and RecursionError cover malformed JSON.
        logger.warning("BED request to %s failed: %s", url, exc)
        raise DispatchError() from exc

    try:
        result = CalculationResult.from_response(body)
    except ValueError as exc:
        logger.warning("BED response from %s was malformed: %s", url, exc)
        raise DispatchError() from exc

    if result.warning:
        logger.info("Calculation service returned a warning: %s", result.warning)
    return result
