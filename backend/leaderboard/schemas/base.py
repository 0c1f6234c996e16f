from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase keys and serializes as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def reject_explicit_nulls(model: BaseModel, nullable: set[str]) -> None:
    """Raise if a non-nullable field was sent as an explicit ``null``."""
    for field in model.model_fields_set:
        if field not in nullable and getattr(model, field) is None:
            raise ValueError(f"{to_camel(field)} may not be null")
