from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DashboardStats(BaseModel):
    """Serialized with camelCase keys (totalProperties, pendingRequests, ...)"""
    total_properties: int
    total_requests: int
    pending_requests: int
    issued_properties: int
    total_items: int
    available_items: int
    issued_items: int
    total_value: float

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
