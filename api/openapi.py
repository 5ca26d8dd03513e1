"""OpenAPI description settings for the todo API."""

API_TITLE = "Todo API"
API_VERSION = "0.3.0"
API_DESCRIPTION = "Create, list, fetch, update and delete todo records."

OPENAPI_URL = "/api-doc/openapi.json"
SWAGGER_UI_URL = "/swagger-ui"

TAGS = [{"name": "todos", "description": "Todo records"}]
