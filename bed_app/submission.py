"""
One submission of the BED form, from raw field text to the displayed state.

The state mapping is ``st.session_state`` inside the app and a plain dict in
tests. A token counter identifies the latest submission so a late response
from an older one can never overwrite newer output.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping
from typing import Any, Optional

from bed_app.client import dispatch
from bed_app.config import RECORD_RUNS
from bed_app.errors import DispatchError, ValidationError
from bed_app.models import CalculationResult, FormInput, GapMode, UIState, ValidatedRequest
from bed_app.presenter import present
from bed_app.runs import record_run
from bed_app.validators import validate_form_input

logger = logging.getLogger(__name__)

FORM_DEFAULTS: dict[str, Any] = {
    "total_dose": "",
    "total_beam_on": "",
    "isocentres": "",
    "use_gap_array": False,
    "avg_gap_time": "",
    "gap_sequence": "",
}

UI_STATE_KEY = "bed_ui_state"
TOKEN_KEY = "bed_submission_token"
PENDING_KEY = "bed_submission_pending"

Dispatcher = Callable[[ValidatedRequest], CalculationResult]
Recorder = Callable[[ValidatedRequest, Optional[CalculationResult], Optional[str]], Any]


def init_submission_state(state: MutableMapping[str, Any]) -> None:
    for key, value in FORM_DEFAULTS.items():
        state.setdefault(key, value)
    state.setdefault(UI_STATE_KEY, UIState())
    state.setdefault(TOKEN_KEY, 0)
    state.setdefault(PENDING_KEY, False)


def form_from_state(state: MutableMapping[str, Any]) -> FormInput:
    return FormInput(
        total_dose=str(state.get("total_dose") or ""),
        total_beam_on=str(state.get("total_beam_on") or ""),
        isocentres=str(state.get("isocentres") or ""),
        gap_mode=GapMode.SEQUENCE if state.get("use_gap_array") else GapMode.SCALAR,
        avg_gap_time=str(state.get("avg_gap_time") or ""),
        gap_sequence=str(state.get("gap_sequence") or ""),
    )


def is_pending(state: MutableMapping[str, Any]) -> bool:
    return bool(state.get(PENDING_KEY, False))


def begin_submission(state: MutableMapping[str, Any]) -> int | None:
    if is_pending(state):
        return None
    token = int(state.get(TOKEN_KEY, 0)) + 1
    state[TOKEN_KEY] = token
    state[PENDING_KEY] = True
    return token


def complete_submission(state: MutableMapping[str, Any], token: int, ui_state: UIState) -> bool:
    if token != int(state.get(TOKEN_KEY, 0)):
        logger.debug("Discarding outcome of superseded submission %s", token)
        return False
    state[UI_STATE_KEY] = ui_state
    state[PENDING_KEY] = False
    return True


def _default_recorder() -> Recorder | None:
    return record_run if RECORD_RUNS else None


def _record(
    recorder: Recorder | None,
    request: ValidatedRequest,
    result: CalculationResult | None,
    error: str | None = None,
) -> None:
    if recorder is None:
        return
    try:
        recorder(request, result, error)
    except Exception:
        logger.warning("Could not record calculation run", exc_info=True)


def _run(
    current: UIState,
    form: FormInput,
    dispatcher: Dispatcher,
    recorder: Recorder | None,
) -> UIState:
    try:
        request = validate_form_input(form)
    except ValidationError as exc:
        logger.info("Form rejected: %s", exc.message)
        return present(current, exc)

    try:
        result = dispatcher(request)
    except DispatchError as exc:
        _record(recorder, request, None, exc.message)
        return present(current, exc)
    except Exception as exc:
        logger.exception("Unexpected failure while calculating BED")
        failure = DispatchError()
        _record(recorder, request, None, str(exc) or failure.message)
        return present(current, failure)

    _record(recorder, request, result)
    return present(current, result)


def submit(
    state: MutableMapping[str, Any],
    form: FormInput | None = None,
    dispatcher: Dispatcher = dispatch,
    recorder: Recorder | None = None,
) -> UIState:
    """
    Validate the form, call the calculation service and store the next UIState.

    Never raises for bad input or service failures. While another submission
    is pending the call is ignored and the current state is returned.
    """
    init_submission_state(state)
    token = begin_submission(state)
    if token is None:
        logger.info("Submission ignored while a calculation is pending")
        return state[UI_STATE_KEY]

    if form is None:
        form = form_from_state(state)
    if recorder is None:
        recorder = _default_recorder()

    try:
        next_state = _run(state[UI_STATE_KEY], form, dispatcher, recorder)
        complete_submission(state, token, next_state)
    finally:
        if int(state.get(TOKEN_KEY, 0)) == token:
            state[PENDING_KEY] = False
    return state[UI_STATE_KEY]
