from pydantic import BaseModel

class LocationResult(BaseModel):
    city: str
    state: str
    area: str
    pincode: str

class PincodeResponse(BaseModel):
    success: bool
    data: LocationResult
