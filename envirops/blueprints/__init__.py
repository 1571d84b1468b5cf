"""HTTP blueprints."""
from flask import request

from envirops.forms import validate_payload


def json_body(form_class, partial=False):
    """Validated JSON body of the current request."""
    return validate_payload(form_class, request.get_json(silent=True), partial=partial)
