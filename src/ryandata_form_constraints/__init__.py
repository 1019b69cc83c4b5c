"""RyanData Form Constraints - declarative field constraints for form validation.

Turns a JSON-shaped constraint specification (type -> field -> validator ->
config) into validation functions that can be attached to form controls or
called directly.

Example:
    >>> from ryandata_form_constraints import ConstraintService
    >>> service = ConstraintService(
    ...     {"Person": {"firstName": {"required": {"message": "First name is required."}}}}
    ... )
    >>> service.validate("Person", "firstName", "")
    {'required': {'message': 'First name is required.'}}

    # Build controls for a model instance
    >>> controls = service.create_form_group_controls({"firstName": "John"}, "Person")
    >>> controls["firstName"].errors is None
    True

    # Register a custom validator factory
    >>> service.register_validator_factories([MyFactory()])
"""

from ryandata_form_constraints.core import (
    ConstraintRegistry,
    FieldResolver,
    ValidatorFactoryRegistry,
    combine,
)
from ryandata_form_constraints.forms import (
    FormControl,
    FormControlBuilder,
    FormGroup,
    ManualValidator,
    ValidatorAttacher,
)
from ryandata_form_constraints.models import (
    PACKAGE_NAME,
    ConstraintSpec,
    ControlDescriptor,
    RyanDataConstraintError,
    ValidationErrors,
    ValidationFunction,
    ValidatorConfig,
    always_valid,
)
from ryandata_form_constraints.protocols import (
    ControlProtocol,
    ControlTreeProtocol,
    ValidatorFactoryProtocol,
)
from ryandata_form_constraints.service import (
    ConstraintService,
    add_validators,
    create_form_group_controls,
    get_default_service,
    register_validator_factories,
    reset_default_service,
    set_constraints,
    validate,
)
from ryandata_form_constraints.validators import (
    BaseValidatorFactory,
    create_default_factories,
)

__version__ = "0.1.0"

__all__ = [
    # Main service
    "ConstraintService",
    "get_default_service",
    "reset_default_service",
    # Convenience functions
    "set_constraints",
    "register_validator_factories",
    "create_form_group_controls",
    "add_validators",
    "validate",
    # Core
    "ConstraintRegistry",
    "ValidatorFactoryRegistry",
    "FieldResolver",
    "combine",
    # Forms
    "FormControl",
    "FormGroup",
    "FormControlBuilder",
    "ValidatorAttacher",
    "ManualValidator",
    # Models
    "ConstraintSpec",
    "ControlDescriptor",
    "ValidationErrors",
    "ValidationFunction",
    "ValidatorConfig",
    "always_valid",
    # Errors
    "PACKAGE_NAME",
    "RyanDataConstraintError",
    # Protocols
    "ControlProtocol",
    "ControlTreeProtocol",
    "ValidatorFactoryProtocol",
    # Validators
    "BaseValidatorFactory",
    "create_default_factories",
]
