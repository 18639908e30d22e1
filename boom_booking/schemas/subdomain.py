from pydantic import BaseModel, Field


class SubdomainCheckRequest(BaseModel):
    subdomain: str = Field(..., min_length=1, max_length=255)
