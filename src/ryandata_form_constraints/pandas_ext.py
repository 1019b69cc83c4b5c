from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pandas as pd

    from ryandata_form_constraints.service import ConstraintService


def validate_dataframe(
    df: pd.DataFrame,
    type_name: str,
    *,
    service: ConstraintService | None = None,
    columns: list[str] | None = None,
) -> pd.DataFrame:
    """Validate DataFrame columns as fields of a constrained type.

    Each row is treated as one model instance. Missing values (NaN/NaT/None)
    are passed to the validators as None.

    Args:
        df: Input DataFrame whose columns are field names.
        type_name: Type name the constraints are declared under.
        service: Optional ConstraintService to use. Defaults to the shared one.
        columns: Columns to validate. Defaults to every constrained column
            present in the DataFrame.

    Returns:
        DataFrame with the same index holding, per cell, the validation
        errors dict or None.
    """
    import pandas as pd

    from ryandata_form_constraints.service import get_default_service

    svc = service or get_default_service()

    if columns is None:
        constrained = svc.constraint_registry.field_names(type_name)
        columns = [col for col in df.columns if col in constrained]

    result = pd.DataFrame(index=df.index)
    for col in columns:
        validator = svc.field_validator(type_name, col)
        result[col] = df[col].map(lambda x, v=validator: v(None if _is_missing(x) else x)).astype(
            object
        )
    return result


def invalid_rows(
    df: pd.DataFrame,
    type_name: str,
    *,
    service: ConstraintService | None = None,
) -> pd.DataFrame:
    """Get the rows of a DataFrame that fail at least one constraint.

    Args:
        df: Input DataFrame whose columns are field names.
        type_name: Type name the constraints are declared under.
        service: Optional ConstraintService to use.

    Returns:
        Subset of df containing only invalid rows.
    """
    errors = validate_dataframe(df, type_name, service=service)
    if errors.empty or len(errors.columns) == 0:
        return df.iloc[0:0]
    mask = errors.notna().any(axis=1)
    return df[mask]


def _is_missing(value: object) -> bool:
    import pandas as pd

    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


class ConstraintAccessor:
    """Pandas accessor for constraint validation.

    Usage:
        >>> from ryandata_form_constraints.pandas_ext import register_accessor
        >>> register_accessor()
        >>> df = pd.DataFrame({"firstName": ["John", ""]})
        >>> df.constraints.validate("Person")
    """

    def __init__(self, pandas_obj: pd.DataFrame) -> None:
        """Initialize the accessor.

        Args:
            pandas_obj: The DataFrame this accessor is attached to.
        """
        self._obj = pandas_obj

    def validate(self, type_name: str, *, service: ConstraintService | None = None) -> pd.DataFrame:
        """Validate the DataFrame; see validate_dataframe()."""
        return validate_dataframe(self._obj, type_name, service=service)

    def invalid_rows(
        self, type_name: str, *, service: ConstraintService | None = None
    ) -> pd.DataFrame:
        """Get the rows failing at least one constraint; see invalid_rows()."""
        return invalid_rows(self._obj, type_name, service=service)


def register_accessor(name: str = "constraints") -> None:
    """Register the constraint accessor on pandas DataFrame.

    After calling this, you can use:
        >>> df.constraints.validate("Person")

    Args:
        name: Name for the accessor (default: "constraints").
    """
    import pandas as pd

    if not hasattr(pd.DataFrame, name):
        pd.api.extensions.register_dataframe_accessor(name)(ConstraintAccessor)
