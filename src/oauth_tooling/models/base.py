"""Base Pydantic model configuration for OAuth tooling models.

All models inherit from OAuthBaseModel:
- Immutability (frozen=True), so a validated grant cannot drift afterwards
- Strict validation (extra="forbid") so grant variants only carry their own fields
- Flexible field naming (populate_by_name=True) for camelCase aliases
"""

from pydantic import BaseModel, ConfigDict


class OAuthBaseModel(BaseModel):
    """Base model for all OAuth tooling entities.

    Example:
        >>> from pydantic import Field
        >>> class MyModel(OAuthBaseModel):
        ...     name: str
        >>> obj = MyModel(name="test")
        >>> obj.name = "other"  # Raises ValidationError (frozen)
        Traceback (most recent call last):
        ...
        pydantic_core._pydantic_core.ValidationError: ...
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=False,
        validate_default=True,
    )
