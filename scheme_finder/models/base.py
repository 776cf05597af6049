"""
Shared pydantic base for API and storage models
"""
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def get_current_utc_time():
    """Get current UTC time for default values"""
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire"""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True
    )
