from fastapi import APIRouter, Depends, Request

from todolists.dependencies import get_auth_service
from todolists.errors import UnauthorizedError
from todolists.schemas.todo import Message
from todolists.schemas.user import Credentials, SignedIn
from todolists.services.auth_service import AuthService

router = APIRouter()

@router.post("/signin", response_model=SignedIn)
async def sign_in(credentials: Credentials, request: Request, service: AuthService = Depends(get_auth_service)):
    if not await service.sign_in(credentials.username, credentials.password):
        raise UnauthorizedError("Invalid credentials")
    request.session["username"] = credentials.username
    request.session["signed_in"] = True
    return {"username": credentials.username, "message": "Welcome!"}

@router.post("/signout", response_model=Message)
async def sign_out(request: Request):
    request.session.pop("username", None)
    request.session.pop("signed_in", None)
    return {"message": "You are signed out."}
