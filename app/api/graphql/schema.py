"""GraphQL queries and mutations over the auth, persona and upload services."""

from typing import Optional

import strawberry
from fastapi.concurrency import run_in_threadpool
from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.fastapi import GraphQLRouter
from strawberry.file_uploads import Upload
from strawberry.schema.config import StrawberryConfig
from strawberry.types import Info

from app.api.graphql.context import GraphQLContext, get_context
from app.api.graphql.types import AuthPayload, Persona, UploadedFile, User
from app.core.config import Settings
from app.core.errors import AppError, AuthenticationError, StoreError, ValidationError
from app.schemas.persona import PersonaCreate, PersonaUpdate

GENERIC_SERVER_ERROR = "Internal server error"

ContextInfo = Info[GraphQLContext, None]


def _persona_id(value: strawberry.ID) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid persona id: {value!r}") from None


@strawberry.type
class Query:
    @strawberry.field
    async def users(self, info: ContextInfo) -> list[User]:
        users = await run_in_threadpool(info.context.auth.list_users)
        return [User.from_record(u) for u in users]

    @strawberry.field
    async def personas(self, info: ContextInfo) -> list[Persona]:
        personas = await run_in_threadpool(info.context.personas.list_all)
        return [Persona.from_record(p) for p in personas]

    @strawberry.field
    async def persona(self, info: ContextInfo, id: strawberry.ID) -> Optional[Persona]:
        record = await run_in_threadpool(info.context.personas.get, _persona_id(id))
        return Persona.from_record(record) if record is not None else None

    @strawberry.field(name="loggedInUser")
    async def logged_in_user(self, info: ContextInfo) -> Optional[User]:
        """The user identified by the request's bearer token."""
        identity = info.context.user
        if identity is None:
            raise AuthenticationError("Not authenticated")
        user = await run_in_threadpool(info.context.auth.get_user, identity.user_id)
        return User.from_record(user) if user is not None else None


@strawberry.type
class Mutation:
    @strawberry.mutation(name="uploadFile")
    async def upload_file(self, info: ContextInfo, file: Upload) -> UploadedFile:
        """Stream the upload to storage and return its public URL."""
        stored = await info.context.uploads.store(file, getattr(file, "filename", None))
        return UploadedFile.from_stored(stored)

    @strawberry.mutation
    async def signup(self, info: ContextInfo, name: str, email: str, password: str) -> Optional[AuthPayload]:
        result = await run_in_threadpool(info.context.auth.signup, name, email, password)
        return AuthPayload.from_result(result)

    @strawberry.mutation
    async def login(self, info: ContextInfo, email: str, password: str) -> Optional[AuthPayload]:
        result = await run_in_threadpool(info.context.auth.login, email, password)
        return AuthPayload.from_result(result)

    @strawberry.mutation(name="addPersona")
    async def add_persona(
        self,
        info: ContextInfo,
        user_id: int,
        name: str,
        quote: Optional[str] = None,
        description: Optional[str] = None,
        attitudes: Optional[str] = None,
        pain_points: Optional[str] = None,
        jobs_needs: Optional[str] = None,
        activities: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Optional[Persona]:
        record = await run_in_threadpool(
            info.context.personas.create,
            PersonaCreate(
                user_id=user_id,
                name=name,
                quote=quote,
                description=description,
                attitudes=attitudes,
                pain_points=pain_points,
                jobs_needs=jobs_needs,
                activities=activities,
                avatar_url=avatar_url,
            ),
        )
        return Persona.from_record(record)

    @strawberry.mutation(name="updatePersona")
    async def update_persona(
        self,
        info: ContextInfo,
        id: strawberry.ID,
        name: Optional[str] = None,
        quote: Optional[str] = None,
        description: Optional[str] = None,
        attitudes: Optional[str] = None,
        pain_points: Optional[str] = None,
        jobs_needs: Optional[str] = None,
        activities: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Optional[Persona]:
        """Partial update; omitted arguments keep their stored values. Null when the id is unknown."""
        record = await run_in_threadpool(
            info.context.personas.update,
            _persona_id(id),
            PersonaUpdate(
                name=name,
                quote=quote,
                description=description,
                attitudes=attitudes,
                pain_points=pain_points,
                jobs_needs=jobs_needs,
                activities=activities,
                avatar_url=avatar_url,
            ),
        )
        return Persona.from_record(record) if record is not None else None

    @strawberry.mutation(name="deletePersona")
    async def delete_persona(self, info: ContextInfo, id: strawberry.ID) -> bool:
        return await run_in_threadpool(info.context.personas.delete, _persona_id(id))

    @strawberry.mutation(name="deleteAllPersonas")
    async def delete_all_personas(self, info: ContextInfo) -> Optional[bool]:
        return await run_in_threadpool(info.context.personas.delete_all)


def _should_mask(error: GraphQLError) -> bool:
    """Hide store details and unexpected exceptions; keep caller-facing errors."""
    original = error.original_error
    if original is None:
        return False
    if isinstance(original, StoreError):
        return True
    return not isinstance(original, (AppError, NotImplementedError))


def build_schema(settings: Settings) -> strawberry.Schema:
    """Schema keeping snake_case argument names (user_id, pain_points); prod masks internal errors."""
    extensions = []
    if settings.APP_ENV == "prod":
        extensions.append(
            MaskErrors(should_mask_error=_should_mask, error_message=GENERIC_SERVER_ERROR)
        )
    return strawberry.Schema(
        query=Query,
        mutation=Mutation,
        config=StrawberryConfig(auto_camel_case=False),
        extensions=extensions,
    )


def build_graphql_router(settings: Settings) -> GraphQLRouter:
    graphql_ide = "graphiql" if settings.GRAPHQL_IDE and settings.APP_ENV == "dev" else None
    return GraphQLRouter(
        build_schema(settings),
        context_getter=get_context,
        graphql_ide=graphql_ide,
        multipart_uploads_enabled=True,
    )
