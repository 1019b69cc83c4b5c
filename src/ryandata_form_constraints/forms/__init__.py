"""Form-facing operations: building controls, attaching and manual validation."""

from ryandata_form_constraints.forms.attacher import ValidatorAttacher
from ryandata_form_constraints.forms.builder import FormControlBuilder, model_fields
from ryandata_form_constraints.forms.controls import FormControl, FormGroup
from ryandata_form_constraints.forms.manual import ManualValidator

__all__ = [
    "FormControl",
    "FormControlBuilder",
    "FormGroup",
    "ManualValidator",
    "ValidatorAttacher",
    "model_fields",
]
