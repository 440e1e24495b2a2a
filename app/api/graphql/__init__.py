"""GraphQL API: schema, context and FastAPI router."""

from app.api.graphql.context import GraphQLContext, get_context
from app.api.graphql.schema import build_graphql_router, build_schema

__all__ = ["GraphQLContext", "build_graphql_router", "build_schema", "get_context"]
