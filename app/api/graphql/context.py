"""Per-request GraphQL context: services plus the caller's token identity."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from strawberry.fastapi import BaseContext

from app.api.deps import get_auth_service, get_persona_service, get_upload_store
from app.schemas.auth import TokenIdentity
from app.services.auth import AuthService
from app.services.personas import PersonaService
from app.services.uploads import UploadStore

security = HTTPBearer(auto_error=False)


class GraphQLContext(BaseContext):
    """Services for resolvers; user is None for unauthenticated requests."""

    def __init__(
        self,
        auth: AuthService,
        personas: PersonaService,
        uploads: UploadStore,
        user: TokenIdentity | None = None,
    ) -> None:
        super().__init__()
        self.auth = auth
        self.personas = personas
        self.uploads = uploads
        self.user = user


async def get_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
    personas: Annotated[PersonaService, Depends(get_persona_service)],
    uploads: Annotated[UploadStore, Depends(get_upload_store)],
) -> GraphQLContext:
    """
    Build the context once per request from `Authorization: Bearer <token>`.

    A missing or invalid token gives an unauthenticated context; the request
    itself is never rejected here.
    """
    token = credentials.credentials if credentials is not None else None
    return GraphQLContext(
        auth=auth,
        personas=personas,
        uploads=uploads,
        user=auth.verify_token(token),
    )
