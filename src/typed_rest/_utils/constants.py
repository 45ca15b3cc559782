# Environment variables
ENV_BASE_ADDRESS = "REST_CLIENT_BASE_ADDRESS"
ENV_FACTORY_NAME = "REST_CLIENT_FACTORY_NAME"
ENV_USERNAME = "REST_CLIENT_USERNAME"
ENV_PASSWORD = "REST_CLIENT_PASSWORD"
ENV_BEARER_TOKEN = "REST_CLIENT_BEARER_TOKEN"

# Headers
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"

# Media types
ANY_MEDIA_TYPE = "*/*"
APPLICATION_JSON = "application/json"
APPLICATION_JSON_UTF8 = "application/json; charset=utf-8"

LOGGER_NAME = "typed_rest"
