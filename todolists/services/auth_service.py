import logging

from todolists.repositories.todolist_repo import TodoListRepository

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, repo: TodoListRepository):
        self.repo = repo

    async def sign_in(self, username: str, password: str) -> bool:
        authenticated = await self.repo.authenticate(username, password)
        if authenticated:
            logger.info("user %s signed in", username)
        else:
            logger.info("rejected sign-in for %s", username)
        return authenticated
