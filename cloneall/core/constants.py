"""Module holding constants used across cloneall."""

APP_NAME = "clone-all-cli"
USER_AGENT = "clone-all-cli/0.1"

GITHUB_API_BASE = "https://api.github.com"
GITHUB_API_ACCEPT = "application/vnd.github+json"
GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_SCOPES = ("repo", "user", "read:org")

BITBUCKET_API_BASE = "https://bitbucket.org/api/2.0"
BITBUCKET_AUTHORIZE_URL = "https://bitbucket.org/site/oauth2/authorize"
BITBUCKET_TOKEN_URL = "https://bitbucket.org/site/oauth2/access_token"

DEFAULT_DEST = "repos"
DEFAULT_TOKEN_LIFETIME_SEC = 3600
CALLBACK_HOST = "localhost"
CALLBACK_PORT = 8080
CALLBACK_TIMEOUT_SEC = 300
HTTP_TIMEOUT_SEC = 30

AUTHORIZED_PAGE = b"<code><h1>Authorization Ready, close and return to cli :)</h1></code>"
FAILED_PAGE = b"<h1>Authorization failed, return to cli for details.</h1>"
