from pydantic import BaseModel, ConfigDict, Field

class BucketCreate(BaseModel):
    email: str = Field(min_length=1)

class BucketOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    bucket_id: str
    token: str

class HealthOut(BaseModel):
    status: str
