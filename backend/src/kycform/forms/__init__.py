"""Form session state for the rendering layer.

Usage:
    from kycform.forms import make_form_controller

    controller = make_form_controller(on_complete=handle_payload)
    await controller.initialize()
    controller.field("bsn").set_value("123456789")
    controller.submit()
"""

from kycform.forms.controller import (
    FormController,
    FormEvent,
    FormStatus,
    make_form_controller,
)
from kycform.forms.state import FieldState

__all__ = [
    "FieldState",
    "FormController",
    "FormEvent",
    "FormStatus",
    "make_form_controller",
]
