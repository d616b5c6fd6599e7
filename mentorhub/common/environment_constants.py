LOG_LEVEL = "LOG_LEVEL"
DATABASE_URL = "DATABASE_URL"
SQL_DEBUG = "SQL_DEBUG"

AUTH_JWKS_URL = "AUTH_JWKS_URL"
AUTH_JWT_SECRET = "AUTH_JWT_SECRET"
AUTH_JWT_AUDIENCE = "AUTH_JWT_AUDIENCE"
AUTH_JWT_ISSUER = "AUTH_JWT_ISSUER"

SENDGRID_API_KEY = "SENDGRID_API_KEY"
EMAIL_FROM_ADDRESS = "EMAIL_FROM_ADDRESS"
EMAIL_FROM_NAME = "EMAIL_FROM_NAME"

APP_NAME = "APP_NAME"
APP_URL = "APP_URL"
