"""HTTP adapters: REST (FastAPI) and GraphQL."""

from personspine.api.fastapi import create_app, create_app_from_settings
from personspine.api.graphql import create_graphql_router, schema

__all__ = ["create_app", "create_app_from_settings", "create_graphql_router", "schema"]
