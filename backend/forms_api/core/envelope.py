"""Response Envelope — the uniform success/error wrapper returned for every request.

Invariants:
    - status is always present: "OK" or "Error"
    - Error envelopes always carry a code and a non-empty errors list
    - OK payload keys never overwrite status

Design Decisions:
    - Plain dicts over response classes: the api layer wraps them in JSONResponse,
      core stays free of framework imports (ADR: functional core)
"""

from forms_api.core.domain_types import EnvelopeStatus


def ok(**payload) -> dict:
    """Build an OK envelope carrying the given payload keys."""
    body = {key: value for key, value in payload.items() if key != "status"}
    return {"status": EnvelopeStatus.OK.value, **body}


def error(problems: list[str], code: str) -> dict:
    """Build an Error envelope."""
    if not problems:
        raise ValueError("error envelope requires at least one problem")
    return {
        "status": EnvelopeStatus.ERROR.value,
        "code": code,
        "errors": list(problems),
    }


def is_ok(body: dict) -> bool:
    return body.get("status") == EnvelopeStatus.OK.value
