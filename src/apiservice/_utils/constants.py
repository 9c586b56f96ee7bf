# Environment variables
ENV_API_URL = "APISERVICE_URL"
ENV_CACHE_API = "APISERVICE_CACHE_API"
ENV_ACCESS_TOKEN = "APISERVICE_ACCESS_TOKEN"
ENV_DISABLE_SSL_VERIFY = "APISERVICE_DISABLE_SSL_VERIFY"
ENV_HTTP_TIMEOUT = "APISERVICE_HTTP_TIMEOUT"

# Headers
HEADER_AUTH_TOKEN = "X-Auth-Token"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_ACCEPT = "Accept"

# Content types
APPLICATION_JSON = "application/json"

# Files
DOTENV_FILE = ".env"

LOGGER_NAME = "apiservice"
