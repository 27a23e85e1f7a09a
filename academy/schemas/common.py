from pydantic import BaseModel, ConfigDict

class StrictModel(BaseModel):
    """Request body that rejects unknown fields"""
    model_config = ConfigDict(extra="forbid")
