from pydantic import BaseModel, ConfigDict


class BaseTourModel(BaseModel):
    """Shared configuration for tour value types."""
    model_config = ConfigDict(validate_assignment=True, use_enum_values=False)
