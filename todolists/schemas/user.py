from typing import Annotated
from pydantic import BaseModel, StringConstraints

class Credentials(BaseModel):
    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    password: str

class SignedIn(BaseModel):
    username: str
    message: str
